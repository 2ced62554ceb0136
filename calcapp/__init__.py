"""
calcapp Package
"""
from calcapp.config import settings
from calcapp.calculator import Calculator, calculate
from calcapp.conversion import (
    ConversionResult,
    detect_conversion,
    format_conversion_result,
    normalize_unit,
)
from calcapp.expression import evaluate_expression
from calcapp.history import CalculationHistory, HistoryEntry
from calcapp.nlp import NLPResult, process_natural_language_calculation

__version__ = "0.1.0"
__all__ = [
    "settings",
    "Calculator",
    "calculate",
    "ConversionResult",
    "detect_conversion",
    "format_conversion_result",
    "normalize_unit",
    "evaluate_expression",
    "CalculationHistory",
    "HistoryEntry",
    "NLPResult",
    "process_natural_language_calculation",
]
