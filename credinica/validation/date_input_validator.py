"""
Validation for date form fields.

Bridges canonical ISO strings and the values carried by HTML
<input type="date"> / <input type="datetime-local"> controls, and checks
submitted values against required / min / max constraints.

Flags issues with Spanish messages instead of raising.
"""

import logging
from datetime import date, datetime, time
from typing import Any, Optional, Tuple

from credinica.config import Config
from credinica.normalization.date_input import classify
from credinica.normalization.date_normalizer import DateNormalizer, get_date_normalizer
from credinica.normalization.spanish_format import format_pattern

logger = logging.getLogger(__name__)


class DateInputValidator:
    """Validates date field values typed in local time"""

    def __init__(self, normalizer: Optional[DateNormalizer] = None):
        """
        Initialize date input validator.

        Args:
            normalizer: DateNormalizer to use (default: global instance)
        """
        self.normalizer = normalizer or get_date_normalizer()

    def to_input_value(self, value: Any, with_time: bool = False) -> str:
        """
        Convert a canonical instant to the value of a date control.

        Args:
            value: Canonical ISO string or datetime
            with_time: Produce "YYYY-MM-DDTHH:MM" for datetime-local controls

        Returns:
            Local "YYYY-MM-DD" (or "YYYY-MM-DDTHH:MM"), "" if missing or invalid

        Example:
            >>> DateInputValidator().to_input_value("2024-03-15T06:00:00.000Z")
            '2024-03-15'
        """
        local = self.normalizer.to_local(value)
        if local is None:
            return ""

        fmt = Config.INPUT_DATETIME_FORMAT if with_time else Config.INPUT_DATE_FORMAT
        return format_pattern(local, fmt)

    def _display_day(self, day: date) -> str:
        return format_pattern(datetime.combine(day, time()), Config.DISPLAY_DATE_FORMAT)

    def _bound_to_date(self, bound: Any) -> Optional[date]:
        """Read a min/max bound as a local calendar date"""
        canonical = self.normalizer.from_user_input(bound)
        if canonical is None:
            logger.warning(f"Ignoring invalid date bound: {bound!r}")
            return None
        return self.normalizer.to_local(canonical).date()

    def validate(
        self,
        value: Any,
        required: bool = False,
        min_date: Any = None,
        max_date: Any = None
    ) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate a submitted date field.

        Checks:
        - Present when required
        - Parses as a local date
        - Not before min_date / not after max_date (compared by local day)

        Args:
            value: Submitted value ("YYYY-MM-DD", "YYYY-MM-DDTHH:MM", ...)
            required: Whether an empty value is an error
            min_date: Earliest allowed date, same formats as value
            max_date: Latest allowed date, same formats as value

        Returns:
            Tuple of (is_valid, canonical_iso, error_message)
        """
        if classify(value).is_null:
            if required:
                return (False, None, Config.REQUIRED_MESSAGE)
            return (True, None, None)

        canonical = self.normalizer.from_user_input(value)
        if canonical is None:
            return (False, None, Config.INVALID_INPUT_MESSAGE)

        day = self.normalizer.to_local(canonical).date()

        if min_date is not None:
            min_day = self._bound_to_date(min_date)
            if min_day is not None and day < min_day:
                message = Config.MIN_DATE_MESSAGE.format(date=self._display_day(min_day))
                logger.debug(f"Date {day} before minimum {min_day}")
                return (False, canonical, message)

        if max_date is not None:
            max_day = self._bound_to_date(max_date)
            if max_day is not None and day > max_day:
                message = Config.MAX_DATE_MESSAGE.format(date=self._display_day(max_day))
                logger.debug(f"Date {day} after maximum {max_day}")
                return (False, canonical, message)

        return (True, canonical, None)


# Global instance (singleton)
_date_input_validator_instance = None


def get_date_input_validator() -> DateInputValidator:
    """Get global DateInputValidator instance"""
    global _date_input_validator_instance
    if _date_input_validator_instance is None:
        _date_input_validator_instance = DateInputValidator()
    return _date_input_validator_instance
