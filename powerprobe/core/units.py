"""Conversion of raw attribute text into typed values.

Malformed input never raises: it becomes None and the corresponding
field is reported as unknown.
"""

import re
from typing import Optional

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

# Raw power_supply values are micro-units; the capacity model works in milli-units.
MICRO_PER_MILLI = 1000


def truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def parse_int(text: Optional[str]) -> Optional[int]:
    """Parse the leading integer of an attribute value ('42 mA' -> 42)."""
    if not text:
        return None
    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_milli(text: Optional[str]) -> Optional[int]:
    """Parse a micro-unit value and scale it down to milli-units."""
    value = parse_int(text)
    if value is None:
        return None
    return truncating_div(value, MICRO_PER_MILLI)


def parse_temperature(text: Optional[str]) -> Optional[float]:
    """Parse a millidegree Celsius reading into degrees Celsius."""
    value = parse_int(text)
    if value is None:
        return None
    return value / 1000.0
