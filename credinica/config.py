"""
Central configuration for CrediNica date handling.

This module contains the timezone, display formats, sentinel values and
logging settings. All other modules import configuration from here to
maintain consistency.
"""

import os
from typing import List
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Application configuration and constants"""

    # ==========================================
    # Timezone
    # ==========================================
    # IANA zone: UTC-6, with the zone database's historical DST periods (e.g. 2005-2006)
    TIMEZONE_NAME = os.getenv("CREDINICA_TIMEZONE", "America/Managua")

    # ==========================================
    # Display Formats
    # ==========================================
    DISPLAY_DATE_FORMAT = os.getenv("CREDINICA_DISPLAY_FORMAT", "dd/MM/yyyy")
    DISPLAY_DATETIME_FORMAT = os.getenv("CREDINICA_DISPLAY_DATETIME_FORMAT", "dd/MM/yyyy HH:mm:ss")

    # ==========================================
    # Storage Formats (MySQL DATETIME / DATE columns)
    # ==========================================
    # Unicode date patterns, rendered by spanish_format.format_pattern
    STORAGE_DATETIME_FORMAT = "yyyy-MM-dd HH:mm:ss"
    STORAGE_DATE_FORMAT = "yyyy-MM-dd"
    STORAGE_DATETIME_START_FORMAT = "yyyy-MM-dd '00:00:00'"

    # HTML <input type="date"> and <input type="datetime-local"> values
    INPUT_DATE_FORMAT = "yyyy-MM-dd"
    INPUT_DATETIME_FORMAT = "yyyy-MM-dd'T'HH:mm"

    # ==========================================
    # Sentinel Values
    # ==========================================
    NOT_AVAILABLE = "N/A"
    INVALID_DATE = "Fecha Inválida"

    # Stringified placeholders that mean "no value"
    NULL_TOKENS: List[str] = ["null", "undefined", "None"]

    # ==========================================
    # User Input Parsing
    # ==========================================
    # Languages and settings for the dateparser fallback on typed dates
    USER_INPUT_LANGUAGES: List[str] = ["es"]
    USER_INPUT_PARSER_SETTINGS = {
        "DATE_ORDER": "DMY",
        "STRICT_PARSING": True,
        "RETURN_AS_TIMEZONE_AWARE": False,
        # Absolute dates only, no "hoy" / "ayer"
        "PARSERS": ["custom-formats", "absolute-time"],
    }

    # ==========================================
    # Validation Messages
    # ==========================================
    REQUIRED_MESSAGE = "Este campo es requerido"
    INVALID_INPUT_MESSAGE = "Fecha inválida"
    MIN_DATE_MESSAGE = "La fecha debe ser posterior o igual a {date}"
    MAX_DATE_MESSAGE = "La fecha debe ser anterior o igual a {date}"

    # ==========================================
    # Logging Configuration
    # ==========================================
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")          # DEBUG, INFO, WARNING, ERROR
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    # ==========================================
    # Class Methods
    # ==========================================
    @classmethod
    def get_timezone(cls) -> ZoneInfo:
        """
        Build the configured local timezone.

        Returns:
            ZoneInfo: Timezone used for every local wall-clock conversion
        """
        return ZoneInfo(cls.TIMEZONE_NAME)

    @classmethod
    def print_config_summary(cls) -> None:
        """Print configuration summary for debugging"""
        print("=" * 60)
        print("CrediNica - Configuration Summary")
        print("=" * 60)
        print(f"Timezone:             {cls.TIMEZONE_NAME}")
        print(f"Display format:       {cls.DISPLAY_DATE_FORMAT}")
        print(f"Display datetime:     {cls.DISPLAY_DATETIME_FORMAT}")
        print(f"Log level:            {cls.LOG_LEVEL}")
        print("=" * 60)
