"""
Display rendering for conversion results.
"""
from ..formatting import format_number, round_half_up
from .models import ConversionResult


def format_conversion_result(result: ConversionResult) -> str:
    """``"100 kilometers = 62.14 miles"``; only the result is rounded."""
    return (
        f"{format_number(result.value)} {result.from_unit} = "
        f"{round_half_up(result.result, 2)} {result.to_unit}"
    )
