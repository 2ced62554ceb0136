"""
Unit alias table and conversion graph.

The graph is sparse and directed: each edge is an independently authored
formula between two canonical units. There is no multi-hop chaining and no
reverse-edge inference, so ``kilometers -> feet`` works only because that edge
is listed, not because ``kilometers -> meters -> feet`` exists.
"""
from types import MappingProxyType
from typing import Callable, Mapping

ConversionFn = Callable[[float], float]


# ─────────────────────────────────────────────────────────────────────
# Alias map: abbreviations / singulars / symbols -> canonical unit
# ─────────────────────────────────────────────────────────────────────
UNIT_ALIASES: Mapping[str, str] = MappingProxyType({
    # Length
    "km": "kilometers",
    "kilometer": "kilometers",
    "mile": "miles",
    "mi": "miles",
    "m": "meters",
    "meter": "meters",
    "cm": "centimeters",
    "centimeter": "centimeters",
    "in": "inches",
    "inch": "inches",
    '"': "inches",
    "ft": "feet",
    "foot": "feet",
    "'": "feet",
    "yd": "yards",
    "yard": "yards",

    # Weight
    "kg": "kilograms",
    "kilogram": "kilograms",
    "lb": "pounds",
    "lbs": "pounds",
    "pound": "pounds",
    "g": "grams",
    "gram": "grams",
    "oz": "ounces",
    "ounce": "ounces",

    # Temperature
    "c": "celsius",
    "f": "fahrenheit",
    "°c": "celsius",
    "°f": "fahrenheit",
    "celsius": "celsius",
    "centigrade": "celsius",
    "fahrenheit": "fahrenheit",

    # Volume
    "l": "liters",
    "liter": "liters",
    "gal": "gallons",
    "gallon": "gallons",
    "ml": "milliliters",
    "milliliter": "milliliters",
})


def _edges(table: Mapping[str, ConversionFn]) -> Mapping[str, ConversionFn]:
    return MappingProxyType(dict(table))


# ─────────────────────────────────────────────────────────────────────
# Conversion graph: source -> target -> formula
# ─────────────────────────────────────────────────────────────────────
CONVERSIONS: Mapping[str, Mapping[str, ConversionFn]] = MappingProxyType({
    # Length
    "kilometers": _edges({
        "miles": lambda v: v * 0.621371,
        "meters": lambda v: v * 1000,
        "feet": lambda v: v * 3280.84,
        "inches": lambda v: v * 39370.1,
        "yards": lambda v: v * 1093.61,
        "centimeters": lambda v: v * 100000,
    }),
    "miles": _edges({
        "kilometers": lambda v: v * 1.60934,
        "meters": lambda v: v * 1609.34,
        "feet": lambda v: v * 5280,
        "inches": lambda v: v * 63360,
        "yards": lambda v: v * 1760,
    }),
    "meters": _edges({
        "kilometers": lambda v: v / 1000,
        "miles": lambda v: v / 1609.34,
        "feet": lambda v: v * 3.28084,
        "inches": lambda v: v * 39.3701,
        "yards": lambda v: v * 1.09361,
        "centimeters": lambda v: v * 100,
    }),
    "feet": _edges({
        "kilometers": lambda v: v / 3280.84,
        "miles": lambda v: v / 5280,
        "meters": lambda v: v / 3.28084,
        "inches": lambda v: v * 12,
        "yards": lambda v: v / 3,
        "centimeters": lambda v: v * 30.48,
    }),
    "inches": _edges({
        "kilometers": lambda v: v / 39370.1,
        "miles": lambda v: v / 63360,
        "meters": lambda v: v / 39.3701,
        "feet": lambda v: v / 12,
        "yards": lambda v: v / 36,
        "centimeters": lambda v: v * 2.54,
    }),
    "yards": _edges({
        "kilometers": lambda v: v / 1093.61,
        "miles": lambda v: v / 1760,
        "meters": lambda v: v / 1.09361,
        "feet": lambda v: v * 3,
        "inches": lambda v: v * 36,
    }),
    "centimeters": _edges({
        "kilometers": lambda v: v / 100000,
        "meters": lambda v: v / 100,
        "feet": lambda v: v / 30.48,
        "inches": lambda v: v / 2.54,
    }),

    # Weight
    "kilograms": _edges({
        "pounds": lambda v: v * 2.20462,
        "grams": lambda v: v * 1000,
        "ounces": lambda v: v * 35.274,
    }),
    "pounds": _edges({
        "kilograms": lambda v: v / 2.20462,
        "grams": lambda v: v * 453.592,
        "ounces": lambda v: v * 16,
    }),
    "grams": _edges({
        "kilograms": lambda v: v / 1000,
        "pounds": lambda v: v / 453.592,
        "ounces": lambda v: v / 28.3495,
    }),
    "ounces": _edges({
        "kilograms": lambda v: v / 35.274,
        "pounds": lambda v: v / 16,
        "grams": lambda v: v * 28.3495,
    }),

    # Temperature
    "celsius": _edges({
        "fahrenheit": lambda v: (v * 9 / 5) + 32,
    }),
    "fahrenheit": _edges({
        "celsius": lambda v: (v - 32) * 5 / 9,
    }),

    # Volume
    "liters": _edges({
        "gallons": lambda v: v * 0.264172,
        "milliliters": lambda v: v * 1000,
    }),
    "gallons": _edges({
        "liters": lambda v: v / 0.264172,
        "milliliters": lambda v: v * 3785.41,
    }),
    "milliliters": _edges({
        "liters": lambda v: v / 1000,
        "gallons": lambda v: v / 3785.41,
    }),
})


def normalize_unit(token: str) -> str:
    """Map a free-text unit token to its canonical identifier.

    Unknown tokens come back lowercased and otherwise untouched, so callers
    can treat the result as canonical either way.
    """
    key = token.lower()
    return UNIT_ALIASES.get(key, key)


def get_conversion(from_unit: str, to_unit: str):
    """Return the edge function between two canonical units, or None."""
    targets = CONVERSIONS.get(from_unit)
    if targets is None:
        return None
    return targets.get(to_unit)


def has_edges(unit: str) -> bool:
    """True if the canonical unit appears on either end of some edge."""
    if unit in CONVERSIONS:
        return True
    return any(unit in targets for targets in CONVERSIONS.values())
