"""
Conversion request parser.

Patterns are tried most specific first: an explicit number always wins over
the carried value, so a number the user typed is never silently replaced by a
stale display value.
"""
import logging
import math
import re
from typing import Optional

from .models import ConversionRequest

logger = logging.getLogger(__name__)

_UNIT = r"([a-zA-Z°]+)"
_SEPARATOR = r"\s+(?:to|in)\s+"

# A leading "-" is a sign only when it does not follow a word or a number (5-10 is a range).
VALUE_PATTERN = re.compile(
    r"(?:convert\s+)?((?<![\w.])-?\d+(?:\.\d+)?)\s+" + _UNIT + _SEPARATOR + _UNIT,
    re.IGNORECASE,
)
FROM_TO_PATTERN = re.compile(
    r"(?:convert\s+)?(?:from\s+)?" + _UNIT + _SEPARATOR + _UNIT,
    re.IGNORECASE,
)
SIMPLE_PATTERN = re.compile(_UNIT + _SEPARATOR + _UNIT, re.IGNORECASE)


def parse_carried_value(carried_value: Optional[str]) -> Optional[float]:
    """Parse a display value reused as the conversion amount."""
    if carried_value is None:
        return None
    try:
        value = float(carried_value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_conversion(text: str, carried_value: Optional[str] = None) -> Optional[ConversionRequest]:
    """Extract a value and two raw unit tokens from free-form text.

    Returns None when no pattern matches, or when the matching pattern has no
    number and ``carried_value`` is missing or not a finite float.
    """
    match = VALUE_PATTERN.search(text)
    if match:
        return ConversionRequest(float(match.group(1)), match.group(2), match.group(3))

    match = FROM_TO_PATTERN.search(text) or SIMPLE_PATTERN.search(text)
    if not match:
        logger.debug(f"No pattern match found for input: {text!r}")
        return None

    value = parse_carried_value(carried_value)
    if value is None:
        logger.debug(f"No usable previous value for input {text!r}: {carried_value!r}")
        return None
    return ConversionRequest(value, match.group(1), match.group(2))
