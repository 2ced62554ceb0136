import pytest

from calcapp.calculator import ERROR, Calculator, calculate
from calcapp.history import CalculationHistory


def press_all(calc, keys):
    for key in keys:
        calc.press(key)


def test_addition_records_history():
    history = CalculationHistory()
    calc = Calculator(history)
    press_all(calc, ["5", "+", "3", "="])
    assert calc.display == "8"
    assert len(history) == 1
    entry = history.history[0]
    assert entry.expression == "5 + 3"
    assert entry.result == "8"


def test_division_by_zero_is_error_without_history():
    history = CalculationHistory()
    calc = Calculator(history)
    press_all(calc, ["5", "/", "0", "="])
    assert calc.display == "Error"
    assert len(history) == 0


def test_history_uses_display_symbols():
    calc = Calculator()
    press_all(calc, ["6", "*", "7", "="])
    assert calc.history.history[0].expression == "6 × 7"
    press_all(calc, ["9", "/", "3", "="])
    assert calc.history.history[0].expression == "9 ÷ 3"
    assert calc.display == "3"


def test_leading_zero_is_replaced():
    calc = Calculator()
    press_all(calc, ["0", "0", "7"])
    assert calc.display == "7"


def test_multi_digit_entry_and_decimal():
    calc = Calculator()
    press_all(calc, ["1", "2", ".", "5", ".", "0"])
    assert calc.display == "12.50"


def test_decimal_starts_fresh_operand():
    calc = Calculator()
    press_all(calc, ["3", "+", ".", "5", "="])
    assert calc.display == "3.5"


def test_chained_operator_evaluates_pending_operation():
    calc = Calculator()
    press_all(calc, ["5", "+", "3", "*"])
    assert calc.display == "8"
    assert calc.previous_number == "8"
    assert calc.current_operator == "*"
    assert calc.equation == "8 × "
    press_all(calc, ["2", "="])
    assert calc.display == "16"
    assert calc.history.history[0].expression == "8 × 2"


def test_operator_change_without_second_operand():
    calc = Calculator()
    press_all(calc, ["5", "+", "-", "2", "="])
    assert calc.display == "3"


def test_equals_without_operator_is_noop():
    calc = Calculator()
    press_all(calc, ["4", "="])
    assert calc.display == "4"
    assert len(calc.history) == 0


def test_equals_while_awaiting_second_operand_is_noop():
    calc = Calculator()
    press_all(calc, ["4", "+", "="])
    assert calc.display == "4"
    assert calc.current_operator == "+"
    assert len(calc.history) == 0


def test_result_stays_visible_and_next_digit_starts_fresh():
    calc = Calculator()
    press_all(calc, ["2", "+", "2", "="])
    assert calc.display == "4"
    assert calc.current_operator == ""
    calc.press("9")
    assert calc.display == "9"


def test_clear_toggle_and_percent():
    calc = Calculator()
    press_all(calc, ["5", "0"])
    calc.press("±")
    assert calc.display == "-50"
    calc.press("%")
    assert calc.display == "-0.5"
    calc.press("C")
    assert calc.display == "0"
    assert calc.current_operator == ""


def test_power_only_in_scientific_mode():
    calc = Calculator()
    calc.press("2")
    with pytest.raises(ValueError):
        calc.press("^")

    sci = Calculator(scientific=True)
    press_all(sci, ["2", "^", "1", "0", "="])
    assert sci.display == "1024"
    assert sci.history.history[0].expression == "2 ^ 10"


def test_invalid_digit_rejected():
    with pytest.raises(ValueError):
        Calculator().press_digit("²")


def test_load_value():
    calc = Calculator()
    calc.load_value(62.1371)
    assert calc.display == "62.1371"
    assert calc.is_new_number


@pytest.mark.parametrize("a,b,op,expected", [
    ("5", "3", "+", "8"),
    ("5", "3", "-", "2"),
    ("2.5", "4", "*", "10"),
    ("1", "3", "/", repr(1 / 3)),
    ("0.1", "0.2", "+", "0.30000000000000004"),
    ("5", "0", "/", ERROR),
    ("abc", "1", "+", ERROR),
    ("Error", "1", "+", ERROR),
    ("2", "3", "^", ERROR),
    ("2", "3", "%", ERROR),
    ("1e308", "10", "*", ERROR),
])
def test_calculate(a, b, op, expected):
    assert calculate(a, b, op) == expected


def test_calculate_power_scientific():
    assert calculate("2", "3", "^", scientific=True) == "8"
    assert calculate("-8", "0.5", "^", scientific=True) == ERROR
