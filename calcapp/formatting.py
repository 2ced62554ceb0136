"""
Number rendering shared by the calculator display and conversion results.
"""
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext


def format_number(value: float) -> str:
    """Render a float the way the display shows it: ``8`` not ``8.0``."""
    if value == 0:
        return "0"
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(float(value))


def round_half_up(value: float, places: int = 2) -> str:
    """Fixed-point string rounded half away from zero."""
    if not math.isfinite(value):
        return repr(float(value))
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + places + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:f}"
