"""
Tagged representation of raw date inputs.

Values arrive from form controls and from the persistence layer as strings,
numbers, native dates or placeholders. They are classified once at the
boundary so the normalizer never has to inspect runtime types again.
"""

import numbers
import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Union

import pandas as pd

from credinica.config import Config

DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InputKind(Enum):
    """Shape of a raw date value"""
    NULL = "null"
    NATIVE_TIME = "native_time"            # datetime (aware or naive)
    LOCAL_DATE = "local_date"              # datetime.date without time
    EPOCH_MILLIS = "epoch_millis"          # milliseconds since 1970-01-01 UTC
    DATE_ONLY_STRING = "date_only_string"  # YYYY-MM-DD
    DATE_TIME_STRING = "date_time_string"  # anything else, parsed as ISO-8601


@dataclass(frozen=True)
class DateInput:
    """A raw date value tagged with its kind"""
    kind: InputKind
    value: Union[None, datetime, date, float, str] = None

    @property
    def is_null(self) -> bool:
        return self.kind is InputKind.NULL

    @property
    def is_string(self) -> bool:
        return self.kind in (InputKind.DATE_ONLY_STRING, InputKind.DATE_TIME_STRING)


NULL_INPUT = DateInput(InputKind.NULL)


def _is_missing(value: Any) -> bool:
    """None, pandas NaN/NaT and falsy scalars count as missing"""
    if value is None:
        return True

    if pd.api.types.is_scalar(value) and pd.isna(value):
        return True

    if isinstance(value, (str, numbers.Number)) and not isinstance(value, bool) and not value:
        return True

    return False


def classify_string(text: str) -> DateInput:
    """
    Classify a string value.

    Strings are stripped first. Empty strings and the placeholder tokens
    produced by stringifying missing values ("null", "undefined", "None")
    are NULL.
    """
    text = text.strip()

    if not text or text in Config.NULL_TOKENS:
        return NULL_INPUT

    if DATE_ONLY_PATTERN.match(text):
        return DateInput(InputKind.DATE_ONLY_STRING, text)

    return DateInput(InputKind.DATE_TIME_STRING, text)


def classify(value: Any) -> DateInput:
    """
    Classify a raw date value into its tagged form.

    Args:
        value: Anything a form or a database row might hand over

    Returns:
        DateInput with the detected kind

    Example:
        >>> classify("2024-03-15")
        DateInput(kind=<InputKind.DATE_ONLY_STRING: 'date_only_string'>, value='2024-03-15')
        >>> classify(None).is_null
        True
    """
    if isinstance(value, DateInput):
        return value

    if _is_missing(value):
        return NULL_INPUT

    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()

    # datetime is a subclass of date, so it must be checked first
    if isinstance(value, datetime):
        return DateInput(InputKind.NATIVE_TIME, value)

    if isinstance(value, date):
        return DateInput(InputKind.LOCAL_DATE, value)

    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return DateInput(InputKind.EPOCH_MILLIS, float(value))

    if not isinstance(value, str):
        value = str(value)

    return classify_string(value)
