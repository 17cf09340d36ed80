"""
Locale Normalizers Module.

Converts Romanian invoice substrings into canonical values:
    - Numbers ("30.075,79", "2.318", "2,318") to floats
    - Dates ("24.02.2025", "17.10.24", "2025-02-24") to ISO strings
    - Half-up rounding for quantities and money

Every function here is total: malformed input yields NaN or an empty
string, never an exception.

Author: ML Engineering Team
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional, Sequence, Union

from src.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


_WHITESPACE = re.compile(r'\s+')
_DOT_GROUP_TAIL = re.compile(r'\.(\d+)$')
_COMMA_GROUP_TAIL = re.compile(r',(\d+)$')
_NUMERIC = re.compile(r'^-?\d+(?:\.\d+)?$')

# DD.MM.YYYY, DD-MM-YYYY, DD/MM/YY or YYYY-MM-DD inside a larger string
_DATE_IN_TEXT = re.compile(r'(\d{1,4})[.\-/](\d{1,2})[.\-/](\d{1,4})')


def normalize_number(raw: Optional[str]) -> float:
    """
    Parse a Romanian-formatted number.

    A separator followed by exactly three trailing digits is a thousands
    grouping when the other separator is absent ("2.318" and "2,318"
    both mean 2318). Otherwise dots group thousands and the comma is the
    decimal mark ("30.075,79" is 30075.79).

    Args:
        raw: Number substring as captured from the invoice.

    Returns:
        Parsed value, or NaN when the string is not numeric. Callers
        must treat NaN as "not found", never as zero.

    Example:
        >>> normalize_number("30.075,79")
        30075.79
        >>> normalize_number("2.318")
        2318.0
    """
    if raw is None:
        return math.nan

    value = _WHITESPACE.sub('', str(raw))
    if not value:
        return math.nan

    dot_tail = _DOT_GROUP_TAIL.search(value)
    comma_tail = _COMMA_GROUP_TAIL.search(value)

    if dot_tail and len(dot_tail.group(1)) == 3 and ',' not in value:
        value = value.replace('.', '')
    elif comma_tail and len(comma_tail.group(1)) == 3 and '.' not in value:
        value = value.replace(',', '')
    else:
        value = value.replace('.', '').replace(',', '.', 1)

    if not _NUMERIC.match(value):
        logger.debug(f"Not a number after normalization: '{raw}' -> '{value}'")
        return math.nan

    return float(value)


def is_number(value: Union[float, int, None]) -> bool:
    """Return True for a real, finite number (NaN and None are not numbers)."""
    if value is None:
        return False
    try:
        return not math.isnan(value) and not math.isinf(value)
    except TypeError:
        return False


def _expand_year(year: str) -> str:
    if len(year) == 2:
        return f"20{year}"
    return year


def normalize_date(value: Union[str, Sequence[str], None]) -> str:
    """
    Convert day/month/year parts into an ISO ``YYYY-MM-DD`` string.

    Accepts either a date string or the three groups captured by a date
    pattern. The group of length 4 decides the order: a trailing 4-digit
    group means day-month-year, a leading one means year-month-day.
    Two-digit years are taken to be in the 2000s. The calendar validity
    of the result is not checked.

    Args:
        value: "24.02.2025", "24-02-2025", "2025-02-24", "17.10.24", or a
            ``(day, month, year)`` / ``(year, month, day)`` sequence.

    Returns:
        ISO date string, or "" when the value cannot be interpreted.

    Example:
        >>> normalize_date("24.02.2025")
        "2025-02-24"
        >>> normalize_date(("17", "10", "24"))
        "2024-10-17"
    """
    if not value:
        return ""

    if isinstance(value, str):
        match = _DATE_IN_TEXT.search(value)
        if not match:
            return ""
        groups = match.groups()
    else:
        groups = tuple(value)
        if len(groups) != 3:
            return ""

    first, second, third = (str(part or '').strip() for part in groups)
    if not (first.isdigit() and second.isdigit() and third.isdigit()):
        return ""

    if len(third) == 4:
        year, month, day = third, second, first
    elif len(first) == 4:
        year, month, day = first, second, third
    elif len(third) == 2 and len(first) <= 2:
        year, month, day = _expand_year(third), second, first
    else:
        return ""

    if len(month) > 2 or len(day) > 2:
        return ""

    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round half away from zero (0.5 -> 1), unlike Python's banker's rounding.

    Returns NaN unchanged.
    """
    if not is_number(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    try:
        return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return value


def round_quantity(value: float) -> int:
    """Round an energy quantity to a whole kWh; NaN becomes 0."""
    if not is_number(value):
        return 0
    return int(round_half_up(value))


def round_money(value: float) -> float:
    """Round a money amount to 2 decimals; NaN becomes 0.0."""
    if not is_number(value):
        return 0.0
    return round_half_up(value, 2)


def clean_text(value: Optional[str]) -> str:
    """Collapse whitespace runs and strip the ends."""
    if not value:
        return ""
    return _WHITESPACE.sub(' ', value).strip()
