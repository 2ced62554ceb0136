"""
calcapp Calculator
Keypad state machine for a four-function calculator with an optional
scientific mode that adds ``^``.
"""
import logging
import math
from typing import Optional

from .formatting import format_number
from .history import CalculationHistory, HistoryEntry

logger = logging.getLogger(__name__)

ERROR = "Error"
DIGITS = "0123456789"

BASIC_OPERATORS = ("+", "-", "*", "/")
SCIENTIFIC_OPERATORS = BASIC_OPERATORS + ("^",)

DISPLAY_SYMBOLS = {"*": "×", "/": "÷"}
KEY_ALIASES = {"×": "*", "x": "*", "÷": "/", "**": "^"}


def _parse_operand(text: str) -> Optional[float]:
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def calculate(a: str, b: str, operator: str, scientific: bool = False) -> str:
    """Evaluate ``a operator b`` for the display.

    Any failure, including division by exactly zero, is the "Error" sentinel.
    """
    num1 = _parse_operand(a)
    num2 = _parse_operand(b)
    if num1 is None or num2 is None:
        return ERROR

    try:
        if operator == "+":
            result = num1 + num2
        elif operator == "-":
            result = num1 - num2
        elif operator == "*":
            result = num1 * num2
        elif operator == "/":
            if num2 == 0:
                return ERROR
            result = num1 / num2
        elif operator == "^" and scientific:
            result = math.pow(num1, num2)
        else:
            return ERROR
    except (OverflowError, ValueError, ZeroDivisionError):
        return ERROR

    if not math.isfinite(result):
        return ERROR
    return format_number(result)


class Calculator:
    """Display, pending operator and pending left operand"""

    def __init__(self, history: Optional[CalculationHistory] = None, scientific: bool = False):
        self.history = history if history is not None else CalculationHistory()
        self.scientific = scientific
        self.clear()

    @property
    def operators(self):
        return SCIENTIFIC_OPERATORS if self.scientific else BASIC_OPERATORS

    def clear(self) -> None:
        self.display = "0"
        self.equation = ""
        self.previous_number = ""
        self.current_operator = ""
        self.is_new_number = True

    def load_value(self, value: float) -> None:
        """Show a value computed elsewhere (conversion, natural language) as a fresh operand"""
        self.clear()
        self.display = format_number(value)

    def press_digit(self, digit: str) -> None:
        if len(digit) != 1 or digit not in DIGITS:
            raise ValueError(f"Not a digit: {digit!r}")
        if self.is_new_number:
            self.display = digit
            self.is_new_number = False
        else:
            self.display = digit if self.display == "0" else self.display + digit

    def press_decimal(self) -> None:
        if self.is_new_number:
            self.display = "0."
            self.is_new_number = False
        elif "." not in self.display:
            self.display += "."

    def press_operator(self, operator: str) -> None:
        operator = KEY_ALIASES.get(operator, operator)
        if operator not in self.operators:
            raise ValueError(f"Unsupported operator: {operator!r}")

        if self.current_operator and not self.is_new_number:
            result = calculate(self.previous_number, self.display, self.current_operator, self.scientific)
            self.display = result
            self.previous_number = result
        else:
            self.previous_number = self.display
        self.current_operator = operator
        self.is_new_number = True
        self.equation = f"{self.previous_number} {DISPLAY_SYMBOLS.get(operator, operator)} "

    def press_equals(self) -> None:
        if not self.current_operator or self.is_new_number:
            return

        result = calculate(self.previous_number, self.display, self.current_operator, self.scientific)
        if result != ERROR:
            symbol = DISPLAY_SYMBOLS.get(self.current_operator, self.current_operator)
            self.history.add_to_history(HistoryEntry(
                expression=f"{self.previous_number} {symbol} {self.display}",
                result=result,
            ))
        else:
            logger.debug(f"Calculation failed: {self.previous_number} {self.current_operator} {self.display}")
        self.display = result
        self.equation = ""
        self.previous_number = ""
        self.current_operator = ""
        self.is_new_number = True

    def toggle_sign(self) -> None:
        num = _parse_operand(self.display)
        self.display = ERROR if num is None else format_number(-num)

    def percent(self) -> None:
        num = _parse_operand(self.display)
        self.display = ERROR if num is None else format_number(num / 100)

    def press(self, key: str) -> None:
        """Dispatch a single keypad label"""
        if len(key) == 1 and key in DIGITS:
            self.press_digit(key)
        elif key == ".":
            self.press_decimal()
        elif key == "=":
            self.press_equals()
        elif key in ("C", "c", "AC"):
            self.clear()
        elif key == "±":
            self.toggle_sign()
        elif key == "%":
            self.percent()
        else:
            self.press_operator(key)
