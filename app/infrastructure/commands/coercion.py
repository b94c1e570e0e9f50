"""Loose value coercion helpers used when binding arguments."""

import re
from typing import Any, Optional

from infrastructure.commands.exceptions import ArgumentTypeError
from infrastructure.commands.models import ArgKind

TRUE_VALUES = frozenset({"y", "yes", "t", "true"})
FALSE_VALUES = frozenset({"n", "no", "f", "false"})

# Leading numeric prefix, trailing garbage is ignored ("12px" -> 12).
# A "0x" prefix switches to hex and needs at least one hex digit after it.
_INT_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|(\d+))", re.ASCII)
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))",
    re.ASCII,
)


def to_boolean(value: Any) -> bool:
    """Attempt to convert a loosely typed value into a boolean.

    Strings are matched case-insensitively after trimming against
    y/yes/t/true and n/no/f/false. The numbers 1 and 0 map to True and False,
    None maps to False and booleans pass through.

    Args:
        value: Value to convert

    Returns:
        The converted boolean

    Raises:
        ArgumentTypeError: If the value cannot be converted
    """
    if isinstance(value, bool):
        return value

    if value is None:
        return False

    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
    elif isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False

    raise ArgumentTypeError(
        value, ArgKind.BOOLEAN, f"Type {value} cannot be converted to a boolean"
    )


def parse_int(value: Any) -> Optional[int]:
    """Parse the leading integer of ``value``, decimal or ``0x`` hex.

    Returns:
        The integer, or None when ``value`` does not start with one
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else None

    match = _INT_PREFIX.match(str(value))
    if not match:
        return None

    sign, hex_digits, digits = match.groups()
    if hex_digits is not None:
        if not hex_digits:
            return None
        number = int(hex_digits, 16)
    else:
        number = int(digits)
    return -number if sign == "-" else number


def parse_float(value: Any) -> Optional[float]:
    """Parse the leading floating point number of ``value``.

    Returns:
        The float, or None when ``value`` does not start with a number
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if value != value else float(value)

    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return None
    return float(match.group(1).replace("Infinity", "inf"))
