"""
Date normalization module for CrediNica.

Converts dates between:
- Raw inputs (strings, epoch milliseconds, native dates) and canonical UTC
  ISO-8601 strings ("2024-03-15T06:00:00.000Z")
- Canonical instants and Managua wall-clock time
- Canonical instants and Spanish display strings
- Canonical instants and MySQL DATETIME / DATE strings

Every operation is total: failures come back as a sentinel value
(None, "", "N/A" or "Fecha Inválida" depending on the operation) and are
logged, never raised.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Callable, Optional

import ciso8601
import dateparser

from credinica.config import Config
from credinica.normalization.date_input import DateInput, InputKind, classify
from credinica.normalization.spanish_format import format_pattern

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Errors that mean "this value is not a usable date"
PARSE_ERRORS = (ValueError, OverflowError, TypeError)


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def format_canonical(instant: datetime) -> str:
    """
    Render an aware datetime as a canonical ISO string.

    Milliseconds are kept (truncated) and the offset is always "Z".
    """
    utc = instant.astimezone(timezone.utc).replace(tzinfo=None)
    return utc.isoformat(timespec="milliseconds") + "Z"


class DateNormalizer:
    """Normalizes dates to canonical UTC ISO strings and back"""

    def __init__(
        self,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize date normalizer.

        Args:
            tz: Local timezone (default: Config.TIMEZONE_NAME, America/Managua)
            clock: Returns the current aware datetime (default: system clock)
        """
        self.tz = tz if tz is not None else Config.get_timezone()
        self.clock = clock or utc_now

    # ==========================================
    # Parsing helpers
    # ==========================================
    def _local_midnight(self, day: date) -> datetime:
        return datetime(day.year, day.month, day.day, tzinfo=self.tz)

    def _to_instant(self, tagged: DateInput) -> datetime:
        """
        Resolve a tagged input to an aware datetime.

        Date-only values are local midnight; naive datetimes and ISO strings
        without an offset are UTC.

        Raises:
            ValueError, OverflowError: If the value is not a valid date
        """
        kind = tagged.kind

        if kind is InputKind.NATIVE_TIME:
            if tagged.value.tzinfo is None:
                return tagged.value.replace(tzinfo=timezone.utc)
            return tagged.value

        if kind is InputKind.LOCAL_DATE:
            return self._local_midnight(tagged.value)

        if kind is InputKind.EPOCH_MILLIS:
            return EPOCH + timedelta(milliseconds=tagged.value)

        if kind is InputKind.DATE_ONLY_STRING:
            # YYYY-MM-DD is local midnight, not UTC midnight
            return self._local_midnight(ciso8601.parse_datetime(tagged.value).date())

        if kind is InputKind.DATE_TIME_STRING:
            parsed = ciso8601.parse_datetime(tagged.value)
            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=timezone.utc)
            return parsed

        raise ValueError("No date value")

    def _user_input_to_instant(self, tagged: DateInput) -> datetime:
        """
        Resolve a tagged input typed by a user to an aware datetime.

        Values without an offset are Managua wall-clock time.

        Raises:
            ValueError, OverflowError: If the value is not a valid date
        """
        kind = tagged.kind

        if kind is InputKind.NATIVE_TIME:
            if tagged.value.tzinfo is None:
                return tagged.value.replace(tzinfo=self.tz)
            return tagged.value

        if kind is InputKind.LOCAL_DATE:
            return self._local_midnight(tagged.value)

        if kind is InputKind.EPOCH_MILLIS:
            return EPOCH + timedelta(milliseconds=tagged.value)

        if kind is InputKind.DATE_ONLY_STRING:
            parsed = ciso8601.parse_datetime(f"{tagged.value}T00:00:00")
            return parsed.replace(tzinfo=self.tz)

        if kind is InputKind.DATE_TIME_STRING:
            try:
                # Fast path for ISO / datetime-local formats
                parsed = ciso8601.parse_datetime(tagged.value)
            except ValueError:
                # Typed dates such as "15/03/2024" or "15 de marzo de 2024"
                parsed = dateparser.parse(
                    tagged.value,
                    languages=Config.USER_INPUT_LANGUAGES,
                    settings=Config.USER_INPUT_PARSER_SETTINGS
                )
                if parsed is None:
                    raise ValueError(f"Unrecognized date: {tagged.value!r}")

            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=self.tz)
            return parsed

        raise ValueError("No date value")

    def _to_naive_fields(self, tagged: DateInput) -> datetime:
        """
        Resolve a tagged input without changing its timezone.

        Used by the storage formatters: the wall-clock fields of the parsed
        value are formatted as they are.
        """
        kind = tagged.kind

        if kind is InputKind.NATIVE_TIME:
            return tagged.value

        if kind is InputKind.LOCAL_DATE:
            return datetime.combine(tagged.value, time())

        if kind is InputKind.EPOCH_MILLIS:
            return EPOCH + timedelta(milliseconds=tagged.value)

        if tagged.is_string:
            return ciso8601.parse_datetime(tagged.value)

        raise ValueError("No date value")

    # ==========================================
    # Canonical instants
    # ==========================================
    def to_canonical(self, value: Any) -> Optional[str]:
        """
        Convert any date input to a canonical ISO string.

        Args:
            value: datetime, date, epoch milliseconds, ISO string or placeholder

        Returns:
            "YYYY-MM-DDTHH:mm:ss.sssZ", or None if missing or unparseable

        Example:
            >>> DateNormalizer().to_canonical("2024-03-15")
            '2024-03-15T06:00:00.000Z'
        """
        tagged = classify(value)
        if tagged.is_null:
            return None

        try:
            return format_canonical(self._to_instant(tagged))
        except PARSE_ERRORS as e:
            logger.warning(f"Error converting to ISO string: {e} (input: {value!r})")
            return None

    def now_as_canonical(self) -> str:
        """Current instant as a canonical ISO string, routed through local time"""
        local = self.to_local(self.clock())
        return format_canonical(self.to_canonical_from_local(local))

    def is_valid_canonical(self, value: Optional[str]) -> bool:
        """
        Check whether a string is a valid ISO-8601 date.

        Returns:
            bool: True if it parses, False for empty or invalid strings
        """
        if not value:
            return False

        try:
            ciso8601.parse_datetime(value)
        except PARSE_ERRORS:
            return False
        return True

    # ==========================================
    # Local wall-clock time
    # ==========================================
    def to_local(self, value: Any) -> Optional[datetime]:
        """
        Convert a canonical instant to local wall-clock time.

        Args:
            value: Canonical ISO string or datetime

        Returns:
            Naive datetime holding the local reading, or None if unparseable
        """
        tagged = classify(value)
        if tagged.is_null:
            return None

        try:
            instant = self._to_instant(tagged)
            return instant.astimezone(self.tz).replace(tzinfo=None)
        except PARSE_ERRORS as e:
            logger.warning(f"Error converting to local time: {e} (input: {value!r})")
            return None

    def to_canonical_from_local(self, local: Optional[datetime]) -> Optional[datetime]:
        """
        Interpret wall-clock fields as local time and return the UTC instant.

        Any tzinfo on the argument is ignored; only its fields are read.
        """
        if local is None:
            return None

        if not isinstance(local, datetime):
            local = datetime.combine(local, time())

        return local.replace(tzinfo=self.tz).astimezone(timezone.utc)

    def today_local(self) -> str:
        """Current local date as YYYY-MM-DD"""
        return format_pattern(self.clock().astimezone(self.tz), Config.STORAGE_DATE_FORMAT)

    def now_local_formatted(self) -> str:
        """Current local date and time as YYYY-MM-DD HH:mm:ss"""
        return format_pattern(self.clock().astimezone(self.tz), Config.STORAGE_DATETIME_FORMAT)

    # ==========================================
    # Display
    # ==========================================
    def format_for_display(self, value: Any, pattern: Optional[str] = None) -> str:
        """
        Format a date for the user in local time with Spanish names.

        Args:
            value: Canonical ISO string or datetime
            pattern: Unicode date pattern (default: "dd/MM/yyyy")

        Returns:
            Formatted string, "N/A" if missing, "Fecha Inválida" if unparseable

        Example:
            >>> DateNormalizer().format_for_display("2024-03-15T06:00:00.000Z")
            '15/03/2024'
        """
        pattern = pattern or Config.DISPLAY_DATE_FORMAT

        tagged = classify(value)
        if tagged.is_null:
            return Config.NOT_AVAILABLE

        try:
            local = self._to_instant(tagged).astimezone(self.tz)
            return format_pattern(local, pattern)
        except PARSE_ERRORS as e:
            logger.warning(f"Error formatting date: {e} (input: {value!r})")
            return Config.INVALID_DATE

    def format_datetime_for_display(self, value: Any) -> str:
        """Format date and time for the user ("dd/MM/yyyy HH:mm:ss")"""
        return self.format_for_display(value, Config.DISPLAY_DATETIME_FORMAT)

    # ==========================================
    # User input
    # ==========================================
    def from_user_input(self, value: Any) -> Optional[str]:
        """
        Convert a date typed by a user (local time) to a canonical ISO string.

        Args:
            value: "YYYY-MM-DD", "YYYY-MM-DDTHH:mm", "15/03/2024", datetime...

        Returns:
            Canonical ISO string, or None if missing or unparseable
        """
        tagged = classify(value)
        if tagged.is_null:
            return None

        try:
            return format_canonical(self._user_input_to_instant(tagged))
        except PARSE_ERRORS as e:
            logger.warning(f"Error converting user input to ISO: {e} (input: {value!r})")
            return None

    # ==========================================
    # MySQL storage formats
    # ==========================================
    def _to_storage(self, value: Any, fmt: str) -> str:
        tagged = classify(value)
        if tagged.is_null:
            return ""

        try:
            return format_pattern(self._to_naive_fields(tagged), fmt)
        except PARSE_ERRORS as e:
            logger.warning(f"Error converting ISO to MySQL format {fmt!r}: {e} (input: {value!r})")
            return ""

    def to_storage_datetime(self, value: Any) -> str:
        """
        Convert an ISO string to a MySQL DATETIME string.

        The parsed value is not moved to local time: "2024-03-15T06:00:00.000Z"
        becomes "2024-03-15 06:00:00".

        Returns:
            "YYYY-MM-DD HH:MM:SS", or "" if missing or unparseable
        """
        return self._to_storage(value, Config.STORAGE_DATETIME_FORMAT)

    def to_storage_date(self, value: Any) -> str:
        """Convert an ISO string to a MySQL DATE string ("" on failure)"""
        return self._to_storage(value, Config.STORAGE_DATE_FORMAT)

    def to_storage_datetime_start(self, value: Any) -> str:
        """Convert an ISO string to a MySQL DATETIME at 00:00:00 ("" on failure)"""
        return self._to_storage(value, Config.STORAGE_DATETIME_START_FORMAT)


# Global instance (singleton)
_date_normalizer_instance = None


def get_date_normalizer() -> DateNormalizer:
    """Get global DateNormalizer instance"""
    global _date_normalizer_instance
    if _date_normalizer_instance is None:
        _date_normalizer_instance = DateNormalizer()
    return _date_normalizer_instance


def to_canonical(value: Any) -> Optional[str]:
    return get_date_normalizer().to_canonical(value)


def now_as_canonical() -> str:
    return get_date_normalizer().now_as_canonical()


def to_local(value: Any) -> Optional[datetime]:
    return get_date_normalizer().to_local(value)


def to_canonical_from_local(local: Optional[datetime]) -> Optional[datetime]:
    return get_date_normalizer().to_canonical_from_local(local)


def format_for_display(value: Any, pattern: Optional[str] = None) -> str:
    return get_date_normalizer().format_for_display(value, pattern)


def format_datetime_for_display(value: Any) -> str:
    return get_date_normalizer().format_datetime_for_display(value)


def from_user_input(value: Any) -> Optional[str]:
    return get_date_normalizer().from_user_input(value)


def today_local() -> str:
    return get_date_normalizer().today_local()


def now_local_formatted() -> str:
    return get_date_normalizer().now_local_formatted()


def is_valid_canonical(value: Optional[str]) -> bool:
    return get_date_normalizer().is_valid_canonical(value)


def to_storage_datetime(value: Any) -> str:
    return get_date_normalizer().to_storage_datetime(value)


def to_storage_date(value: Any) -> str:
    return get_date_normalizer().to_storage_date(value)


def to_storage_datetime_start(value: Any) -> str:
    return get_date_normalizer().to_storage_datetime_start(value)
