"""
Conversion resolver and the engine's public entry points.
"""
import logging
from typing import Optional, Union

from .models import ConversionFailure, ConversionKind, ConversionRequest, ConversionResult, FailureKind
from .parser import parse_conversion
from .units import get_conversion, normalize_unit

logger = logging.getLogger(__name__)

Outcome = Union[ConversionResult, ConversionFailure]


def resolve(request: ConversionRequest) -> Outcome:
    """Apply the graph edge between the request's units.

    Never raises: a missing edge comes back as an UNSUPPORTED failure.
    """
    from_unit = normalize_unit(request.from_unit)
    to_unit = normalize_unit(request.to_unit)
    edge = get_conversion(from_unit, to_unit)
    if edge is None:
        logger.debug(f"Invalid conversion path: {from_unit} to {to_unit}")
        return ConversionFailure(
            FailureKind.UNSUPPORTED,
            f"Conversion from {from_unit} to {to_unit} not supported",
            from_unit=from_unit,
            to_unit=to_unit,
        )
    return ConversionResult(
        value=request.value,
        from_unit=from_unit,
        to_unit=to_unit,
        result=edge(request.value),
        kind=ConversionKind.UNIT,
    )


def try_conversion(text: str, previous_value: Optional[str] = None) -> Outcome:
    """Parse and resolve, keeping the reason for a failure."""
    request = parse_conversion(text, previous_value)
    if request is None:
        return ConversionFailure(FailureKind.PARSE, f"Could not parse conversion: {text!r}")
    return resolve(request)


def detect_conversion(text: str, previous_value: Optional[str] = None) -> Optional[ConversionResult]:
    """Convert free text such as ``"100 km to miles"``; None on any failure."""
    outcome = try_conversion(text, previous_value)
    if isinstance(outcome, ConversionFailure):
        return None
    return outcome
