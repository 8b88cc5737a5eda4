"""
Field coercion for raw export values.

Export cells arrive as strings (or null). These helpers turn one cell into
a typed value or report that it cannot be used.
"""

import math
import re
from typing import Any

from vaultcheck.schemas.records import Number

# Plain decimal notation only: no hex, no underscores, no nan/inf.
_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def normalize_string(value: Any) -> str | None:
    """
    Trim a string cell.

    Returns:
        The trimmed string, or None for non-strings and blank strings.
    """
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def parse_boolean(value: Any) -> bool | None:
    """
    Parse a ``"True"``/``"False"`` cell, case-insensitively.

    Anything else, including ``"yes"``, ``"1"`` and blanks, yields None.
    """
    if not isinstance(value, str):
        return None
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


def parse_number(value: Any) -> Number | None:
    """
    Parse a numeric cell.

    Integral values come back as int so day counts print without a
    trailing ``.0``.

    Returns:
        The parsed number, or None when the cell is absent or blank.

    Raises:
        ValueError: If the cell holds text that is not a finite number.
    """
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed:
        return None

    if not _NUMBER_PATTERN.match(trimmed):
        msg = f'Invalid numeric value: "{trimmed}"'
        raise ValueError(msg)

    parsed = float(trimmed)
    if not math.isfinite(parsed):
        msg = f'Invalid numeric value: "{trimmed}"'
        raise ValueError(msg)

    return int(parsed) if parsed.is_integer() else parsed
