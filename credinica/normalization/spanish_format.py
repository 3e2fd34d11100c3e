"""
Pattern based date formatting with Spanish names.

Patterns use the Unicode (LDML) date field symbols shared by the frontend,
e.g. "dd/MM/yyyy", "dd/MM/yyyy HH:mm:ss" or "EEEE d 'de' MMMM 'de' yyyy".
Text between single quotes is copied as is; two single quotes produce one.
"""

from datetime import datetime
from typing import List, Tuple

SPANISH_MONTHS = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"
]
SPANISH_MONTHS_ABBR = [
    "ene", "feb", "mar", "abr", "may", "jun",
    "jul", "ago", "sep", "oct", "nov", "dic"
]
SPANISH_MONTHS_NARROW = ["E", "F", "M", "A", "M", "J", "J", "A", "S", "O", "N", "D"]

# Indexed by datetime.weekday() (Monday == 0)
SPANISH_WEEKDAYS = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
SPANISH_WEEKDAYS_ABBR = ["lun", "mar", "mié", "jue", "vie", "sáb", "dom"]
SPANISH_WEEKDAYS_SHORT = ["lu", "ma", "mi", "ju", "vi", "sá", "do"]
SPANISH_WEEKDAYS_NARROW = ["L", "M", "X", "J", "V", "S", "D"]

DAY_PERIODS = ("a. m.", "p. m.")

# Token is either ("literal", text) or (symbol, repeat count)
Token = Tuple[str, object]


def tokenize(pattern: str) -> List[Token]:
    """
    Split a pattern into field symbols and literal text.

    Raises:
        ValueError: If a quoted literal is not closed
    """
    tokens: List[Token] = []
    i = 0
    length = len(pattern)

    while i < length:
        char = pattern[i]

        if char == "'":
            # '' outside a quoted section is an escaped quote
            if i + 1 < length and pattern[i + 1] == "'":
                tokens.append(("literal", "'"))
                i += 2
                continue

            end = i + 1
            literal = []
            while True:
                if end >= length:
                    raise ValueError(f"Unterminated quote in date pattern: {pattern!r}")
                if pattern[end] == "'":
                    if end + 1 < length and pattern[end + 1] == "'":
                        literal.append("'")
                        end += 2
                        continue
                    break
                literal.append(pattern[end])
                end += 1

            tokens.append(("literal", "".join(literal)))
            i = end + 1

        elif char.isascii() and char.isalpha():
            run = i
            while run < length and pattern[run] == char:
                run += 1
            tokens.append((char, run - i))
            i = run

        else:
            tokens.append(("literal", char))
            i += 1

    return tokens


def _format_field(dt: datetime, symbol: str, count: int) -> str:
    """Render a single field symbol repeated count times"""
    if symbol == "y":
        if count == 2:
            return f"{dt.year % 100:02d}"
        return str(dt.year).zfill(count)

    if symbol == "M":
        if count == 1:
            return str(dt.month)
        if count == 2:
            return f"{dt.month:02d}"
        if count == 3:
            return SPANISH_MONTHS_ABBR[dt.month - 1]
        if count == 4:
            return SPANISH_MONTHS[dt.month - 1]
        return SPANISH_MONTHS_NARROW[dt.month - 1]

    if symbol == "d":
        return str(dt.day).zfill(count)

    if symbol == "E":
        weekday = dt.weekday()
        if count <= 3:
            return SPANISH_WEEKDAYS_ABBR[weekday]
        if count == 4:
            return SPANISH_WEEKDAYS[weekday]
        if count == 5:
            return SPANISH_WEEKDAYS_NARROW[weekday]
        return SPANISH_WEEKDAYS_SHORT[weekday]

    if symbol == "H":
        return str(dt.hour).zfill(count)

    if symbol == "h":
        return str(dt.hour % 12 or 12).zfill(count)

    if symbol == "m":
        return str(dt.minute).zfill(count)

    if symbol == "s":
        return str(dt.second).zfill(count)

    if symbol == "S":
        # Fraction of a second, truncated
        return f"{dt.microsecond:06d}"[:count].ljust(count, "0")

    if symbol == "a":
        return DAY_PERIODS[0] if dt.hour < 12 else DAY_PERIODS[1]

    raise ValueError(f"Unsupported date pattern symbol: {symbol * count!r}")


def format_pattern(dt: datetime, pattern: str) -> str:
    """
    Format a datetime with a Unicode date pattern and Spanish names.

    The datetime's own wall-clock fields are used; convert it to the
    desired timezone beforehand.

    Args:
        dt: Datetime to render
        pattern: Pattern such as "dd/MM/yyyy"

    Returns:
        Formatted string

    Raises:
        ValueError: On unknown pattern symbols or unbalanced quotes

    Example:
        >>> format_pattern(datetime(2024, 3, 15), "EEEE d 'de' MMMM 'de' yyyy")
        'viernes 15 de marzo de 2024'
    """
    parts = []
    for symbol, value in tokenize(pattern):
        if symbol == "literal":
            parts.append(value)
        else:
            parts.append(_format_field(dt, symbol, value))
    return "".join(parts)
