"""
Unit conversion engine: alias table, conversion graph, parser, resolver,
formatter and the optional currency backend.
"""
from .currency import CurrencyConverter, is_currency_code, perform_conversion
from .formatter import format_conversion_result
from .models import ConversionFailure, ConversionKind, ConversionRequest, ConversionResult, FailureKind
from .parser import parse_conversion
from .resolver import detect_conversion, resolve, try_conversion
from .units import CONVERSIONS, UNIT_ALIASES, normalize_unit

__all__ = [
    "CONVERSIONS",
    "UNIT_ALIASES",
    "ConversionFailure",
    "ConversionKind",
    "ConversionRequest",
    "ConversionResult",
    "CurrencyConverter",
    "FailureKind",
    "detect_conversion",
    "format_conversion_result",
    "is_currency_code",
    "normalize_unit",
    "parse_conversion",
    "perform_conversion",
    "resolve",
    "try_conversion",
]
