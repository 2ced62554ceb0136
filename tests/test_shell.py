import asyncio
import io
import json

import pytest
from rich.console import Console

from calcapp.shell import CalculatorShell


@pytest.fixture
def shell(clean_settings):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    return CalculatorShell(clean_settings, console=console)


def run_line(shell, line):
    return asyncio.run(shell.handle_line(line))


def output(shell):
    return shell.console.file.getvalue()


def test_keypad_line(shell):
    assert run_line(shell, "5 + 3 =") is True
    assert shell.calculator.display == "8"
    assert shell.history.history[0].expression == "5 + 3"
    assert "8" in output(shell)


def test_compact_keypad_line(shell):
    run_line(shell, "12*3=")
    assert shell.calculator.display == "36"


def test_division_by_zero(shell):
    run_line(shell, "5 / 0 =")
    assert shell.calculator.display == "Error"
    assert len(shell.history) == 0


def test_conversion_reuses_display(shell):
    run_line(shell, "2 * 25 =")
    run_line(shell, "km to miles")
    assert "50 kilometers = 31.07 miles" in output(shell)
    assert shell.history.history[0].result == "50 kilometers = 31.07 miles"
    assert shell.calculator.display.startswith("31.068")


def test_unsupported_conversion(shell):
    run_line(shell, "5 kg to miles")
    assert "Invalid conversion" in output(shell)


def test_unknown_input(shell):
    run_line(shell, "hello")
    assert "Unknown input: hello" in output(shell)


def test_scientific_toggle(shell):
    run_line(shell, "2 ^ 3 =")
    assert "Unsupported operator" in output(shell)
    run_line(shell, "sci on")
    run_line(shell, "C")
    run_line(shell, "2 ^ 3 =")
    assert shell.calculator.display == "8"


def test_ai_local_calculation(shell):
    run_line(shell, "ai what is 10 percent of 50")
    assert shell.calculator.display == "5"
    assert shell.history.history[0].result == "5"


def test_ai_local_conversion(shell):
    run_line(shell, "ai convert 5 meters to feet")
    assert "5 meters = 16.40 feet" in output(shell)


def backend_shell(clean_settings, fake_provider_cls, reply):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    provider = fake_provider_cls(json.dumps(reply))
    return CalculatorShell(clean_settings, console=console, provider=provider)


def test_ai_backend_conversion(clean_settings, fake_provider_cls):
    shell = backend_shell(clean_settings, fake_provider_cls, {
        "type": "conversion", "expression": "5", "conversionUnits": {"from": "meters", "to": "feet"},
    })
    run_line(shell, "ai five meters in feet")
    assert "5 meters = 16.40 feet" in output(shell)
    assert shell.history.history[0].expression == "5 meters to feet"


def test_ai_backend_non_numeric_amount_does_not_use_display(clean_settings, fake_provider_cls):
    shell = backend_shell(clean_settings, fake_provider_cls, {
        "type": "conversion", "expression": "five", "conversionUnits": {"from": "km", "to": "miles"},
    })
    run_line(shell, "50 + 0 =")
    run_line(shell, "ai five km in miles")
    assert "Invalid conversion" in output(shell)
    assert "kilometers =" not in output(shell)
    assert shell.calculator.display == "50"
    assert len(shell.history) == 1


def test_ai_backend_multi_word_units_report_failure(clean_settings, fake_provider_cls):
    shell = backend_shell(clean_settings, fake_provider_cls, {
        "type": "conversion", "expression": "3", "conversionUnits": {"from": "square feet", "to": "square meters"},
    })
    run_line(shell, "7 =")
    run_line(shell, "ai 3 square feet in square meters")
    assert "Invalid conversion" in output(shell)
    assert shell.calculator.display == "7"


def test_history_commands(shell):
    run_line(shell, "1 + 1 =")
    run_line(shell, "history")
    assert "1 + 1" in output(shell)
    run_line(shell, "clear history")
    assert len(shell.history) == 0
    run_line(shell, "history")
    assert "No calculations yet" in output(shell)


def test_help_and_exit(shell):
    run_line(shell, "help")
    assert "sci on|off" in output(shell)
    assert run_line(shell, "exit") is False
