"""
CrediNica date CLI

Inspect the local clock and convert date columns of CSV exports.

Usage:
    python -m credinica.cli                                  # Show local date/time
    python -m credinica.cli today                            # Show local date/time
    python -m credinica.cli convert <csv> <column> [mode] [output_csv]

Modes: canonical (default), user, display, datetime, storage, storage-date,
storage-start
"""

import logging
import sys
from typing import Dict, List, Optional, Tuple

import pandas as pd

from credinica.config import Config
from credinica.normalization.date_normalizer import DateNormalizer, get_date_normalizer

logger = logging.getLogger(__name__)

# mode name -> DateNormalizer method name
CONVERSION_MODES: Dict[str, str] = {
    "canonical": "to_canonical",
    "user": "from_user_input",
    "display": "format_for_display",
    "datetime": "format_datetime_for_display",
    "storage": "to_storage_datetime",
    "storage-date": "to_storage_date",
    "storage-start": "to_storage_datetime_start",
}

# Values each mode returns when a cell could not be converted
FAILURE_SENTINELS = (None, "", Config.NOT_AVAILABLE, Config.INVALID_DATE)

USAGE = "Usage: python -m credinica.cli [today | convert <csv> <column> [mode] [output_csv]]"


def configure_logging() -> None:
    """Configure logging for CLI"""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format=Config.LOG_FORMAT,
        datefmt=Config.LOG_DATE_FORMAT
    )


def convert_column(
    df: pd.DataFrame,
    column: str,
    mode: str = "canonical",
    normalizer: Optional[DateNormalizer] = None
) -> Tuple[pd.DataFrame, Dict[str, int]]:
    """
    Convert one date column of a DataFrame, returning a copy.

    Args:
        df: Source data
        column: Column holding the dates
        mode: One of CONVERSION_MODES
        normalizer: DateNormalizer to use (default: global instance)

    Returns:
        Tuple of (converted DataFrame, summary)
        summary: {'total': int, 'converted': int, 'failed': int}

    Raises:
        KeyError: If the column does not exist
        ValueError: If the mode is unknown
    """
    if column not in df.columns:
        raise KeyError(f"Column not found: {column}")

    if mode not in CONVERSION_MODES:
        raise ValueError(f"Unknown mode '{mode}'. Choose from: {', '.join(CONVERSION_MODES)}")

    normalizer = normalizer or get_date_normalizer()
    convert = getattr(normalizer, CONVERSION_MODES[mode])

    result = df.copy()
    converted = [convert(value) for value in df[column]]
    result[column] = converted

    failed = sum(1 for value in converted if value in FAILURE_SENTINELS)
    summary = {
        'total': len(converted),
        'converted': len(converted) - failed,
        'failed': failed
    }

    logger.info(f"Converted column '{column}' ({mode}): "
                f"{summary['converted']}/{summary['total']} ok, {summary['failed']} failed")

    return result, summary


def convert_file(csv_path: str, column: str, mode: str = "canonical", output_path: Optional[str] = None) -> bool:
    """
    Convert a date column of a CSV file.

    Args:
        csv_path: Input CSV
        column: Column holding the dates
        mode: One of CONVERSION_MODES
        output_path: Where to write the result (default: print to stdout)

    Returns:
        True if successful, False otherwise
    """
    try:
        # Keep dates as text so the normalizer sees them as typed
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
        result, summary = convert_column(df, column, mode)
    except (OSError, KeyError, ValueError, pd.errors.ParserError) as e:
        logger.error(f"Error converting {csv_path}: {e}")
        print(f"Error: {e}")
        return False

    if output_path:
        result.to_csv(output_path, index=False)
        print(f"Results saved to: {output_path}")
    else:
        print(result.to_string(index=False))

    print(f"Converted: {summary['converted']}/{summary['total']}  Failed: {summary['failed']}")
    return True


def display_today(normalizer: Optional[DateNormalizer] = None) -> None:
    """Print the current date and time in the configured timezone"""
    normalizer = normalizer or get_date_normalizer()
    Config.print_config_summary()
    print(f"Today:         {normalizer.today_local()}")
    print(f"Now (local):   {normalizer.now_local_formatted()}")
    print(f"Now (ISO UTC): {normalizer.now_as_canonical()}")
    print("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI"""
    configure_logging()
    args = sys.argv[1:] if argv is None else argv

    if not args or args[0] == "today":
        display_today()
        return 0

    if args[0] == "convert":
        if len(args) < 3:
            print("Error: convert needs a CSV path and a column name")
            print(USAGE)
            return 1
        mode = args[3] if len(args) > 3 else "canonical"
        output_path = args[4] if len(args) > 4 else None
        return 0 if convert_file(args[1], args[2], mode, output_path) else 1

    print(f"Error: Unknown command '{args[0]}'")
    print(USAGE)
    return 1


if __name__ == '__main__':
    sys.exit(main())
