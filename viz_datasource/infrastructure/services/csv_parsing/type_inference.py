"""Column type inference and value conversion for CSV cells.

Every non-empty cell classifies into exactly one of number, boolean or
string. A column takes the first type in that order that all of its
non-empty cells satisfy.
"""

import re
import sys
from typing import Iterable

from viz_datasource.core.constants import ColumnType
from viz_datasource.core.models import CellValue

# ASCII digits only; other Unicode digits are text
_INTEGER_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)
# Codes such as 00501 keep their text
_LEADING_ZERO_RE = re.compile(r"^[+-]?0\d", re.ASCII)

# A double round-trips any decimal with at most 15 significant digits
MAX_FLOAT_SIGNIFICANT_DIGITS = 15

BOOLEAN_LITERALS = {"true": True, "false": False}


def _significant_digits(text: str) -> int:
    mantissa = re.split(r"[eE]", text.lstrip("+-"), maxsplit=1)[0]
    digits = mantissa.replace(".", "").lstrip("0")
    if "." in mantissa:
        return len(digits)
    return len(digits.rstrip("0"))


def is_number(text: str) -> bool:
    """Check whether a stripped cell is a number literal we can store exactly."""
    if _LEADING_ZERO_RE.match(text):
        return False
    if _INTEGER_RE.match(text):
        return True
    if not _NUMBER_RE.match(text):
        return False
    significant = _significant_digits(text)
    if significant > MAX_FLOAT_SIGNIFICANT_DIGITS:
        return False
    value = abs(float(text))
    if value == float("inf"):
        return False
    # Underflow to zero or into the subnormal range loses digits
    if significant and value < sys.float_info.min:
        return False
    return True


def is_boolean(text: str) -> bool:
    return text.lower() in BOOLEAN_LITERALS


def infer_column_type(values: Iterable[str]) -> ColumnType:
    """
    Infer the narrowest type shared by all non-empty values of a column.

    Args:
        values: Raw cell texts of one column

    Returns:
        NUMBER, BOOLEAN or STRING. A column without non-empty values is STRING.
    """
    non_empty = [value.strip() for value in values if value.strip()]
    if not non_empty:
        return ColumnType.STRING
    if all(is_number(value) for value in non_empty):
        return ColumnType.NUMBER
    if all(is_boolean(value) for value in non_empty):
        return ColumnType.BOOLEAN
    return ColumnType.STRING


def convert_value(raw: str, column_type: ColumnType) -> CellValue:
    """
    Convert a non-empty cell to its column type.

    Raises:
        ValueError: If the cell is not valid for the column type
    """
    text = raw.strip()
    if column_type == ColumnType.NUMBER:
        if not is_number(text):
            raise ValueError(f"'{raw}' is not a number")
        if _INTEGER_RE.match(text):
            return int(text)
        return float(text)
    if column_type == ColumnType.BOOLEAN:
        if is_boolean(text):
            return BOOLEAN_LITERALS[text.lower()]
        raise ValueError(f"'{raw}' is not a boolean")
    return raw
