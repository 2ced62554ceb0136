"""
calcapp Terminal Shell
Rich, interactive front end over the calculator, converter and history
"""
import asyncio
import logging
import re
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .calculator import ERROR, Calculator
from .config import Settings, settings as default_settings
from .conversion import (
    ConversionFailure,
    ConversionRequest,
    CurrencyConverter,
    format_conversion_result,
    parse_conversion,
    perform_conversion,
)
from .conversion.parser import parse_carried_value
from .errors import BackendError
from .history import CalculationHistory, HistoryEntry
from .llm import LLMProvider, create_provider
from .nlp import NLPResultType, process_natural_language_calculation

logger = logging.getLogger(__name__)

KEY_RE = re.compile(r"AC|\*\*|[0-9.+\-*/^=%±×÷Cc]")

HELP_ROWS = [
    ("5 + 3 =", "Press keypad keys in order (C clears, ± negates, % divides by 100)"),
    ("100 km to miles", "Convert units; 'km to miles' reuses the display value"),
    ("100 usd to eur", "Convert currencies through the exchange-rate backend"),
    ("ai <text>", "Natural language, e.g. 'ai what is 10 percent of 50'"),
    ("history", "Show calculation history"),
    ("clear history", "Forget all history entries"),
    ("sci on|off", "Toggle scientific mode (adds ^)"),
    ("exit", "Leave the shell"),
]


class CalculatorShell:
    """
    calcapp shell.
    Each input line is a command, a conversion request, or a run of keypad keys.
    """

    BANNER = "calcapp: type 'help' for commands"

    def __init__(self, config: Optional[Settings] = None, console: Optional[Console] = None,
                 provider: Optional[LLMProvider] = None,
                 currency: Optional[CurrencyConverter] = None):
        self.config = config or default_settings
        self.console = console or Console(highlight=False)
        self.history = CalculationHistory(max_entries=self.config.system.max_history)
        self.calculator = Calculator(self.history, scientific=self.config.ui.scientific_mode)
        self.provider = provider if provider is not None else create_provider(self.config.ai)
        self.currency = currency or CurrencyConverter(self.config.currency)
        self._running = False

    def render_display(self):
        if self.config.ui.show_equation and self.calculator.equation:
            self.console.print(f"[dim]{self.calculator.equation}[/dim]")
        style = "red" if self.calculator.display == ERROR else "bold"
        self.console.print(f"[{style}]{self.calculator.display}[/{style}]")

    def render_history(self):
        if not self.history.history:
            self.console.print("[dim]No calculations yet[/dim]")
            return
        table = Table(title="History")
        table.add_column("Time", style="dim")
        table.add_column("Expression")
        table.add_column("Result", justify="right", style="green")
        for entry in self.history.history:
            table.add_row(entry.timestamp.strftime("%H:%M:%S"), escape(entry.expression), escape(entry.result))
        self.console.print(table)

    def render_help(self):
        table = Table(title="Commands", show_header=False)
        for example, description in HELP_ROWS:
            table.add_row(f"[cyan]{example}[/cyan]", description)
        self.console.print(table)

    async def run_conversion(self, request: ConversionRequest, label: str):
        try:
            outcome = await perform_conversion(request, self.currency)
        except BackendError as e:
            self.console.print(f"[red]{e}[/red]")
            return
        if isinstance(outcome, ConversionFailure):
            self.console.print(f"[yellow]Invalid conversion: {escape(outcome.message)}[/yellow]")
            return
        formatted = format_conversion_result(outcome)
        self.history.add_to_history(HistoryEntry(expression=label, result=formatted))
        self.calculator.load_value(outcome.result)
        self.console.print(f"[green]{formatted}[/green]")

    async def handle_conversion(self, text: str) -> bool:
        """Try ``text`` as a conversion; False if it does not look like one"""
        request = parse_conversion(text, self.calculator.display)
        if request is None:
            return False
        await self.run_conversion(request, text.strip())
        return True

    async def handle_ai(self, text: str):
        nlp = await process_natural_language_calculation(text, self.provider)
        if nlp.error:
            self.console.print(f"[red]{escape(nlp.error)}[/red]")
            return
        if nlp.type == NLPResultType.CONVERSION:
            # The reply's amount is used as given, never the display value
            value = parse_carried_value(nlp.expression)
            if value is None:
                self.console.print(
                    f"[yellow]Invalid conversion: no number to convert in {escape(repr(nlp.expression))}[/yellow]")
                return
            units = nlp.conversion_units
            request = ConversionRequest(value, units["from"], units["to"])
            await self.run_conversion(request, f"{nlp.expression} {units['from']} to {units['to']}")
            return
        self.calculator.load_value(nlp.result)
        self.history.add_to_history(HistoryEntry(expression=nlp.expression, result=self.calculator.display))
        self.render_display()

    def handle_keys(self, line: str):
        compact = re.sub(r"\s+", "", line)
        keys = KEY_RE.findall(compact)
        if "".join(keys) != compact:
            self.console.print(f"[yellow]Unknown input: {escape(line.strip())}[/yellow]")
            return
        try:
            for key in keys:
                self.calculator.press(key)
        except ValueError as e:
            self.console.print(f"[red]{e}[/red]")
        self.render_display()

    async def handle_line(self, line: str) -> bool:
        """Process one input line; False ends the session"""
        text = line.strip()
        lowered = text.lower()
        if not text:
            return True
        if lowered in ("exit", "quit"):
            return False
        if lowered == "help":
            self.render_help()
        elif lowered == "history":
            self.render_history()
        elif lowered == "clear history":
            self.history.clear_history()
            self.console.print("[dim]History cleared[/dim]")
        elif lowered in ("sci on", "sci off"):
            self.calculator.scientific = lowered.endswith("on")
            self.console.print(f"[dim]Scientific mode {'on' if self.calculator.scientific else 'off'}[/dim]")
        elif lowered.startswith("ai "):
            await self.handle_ai(text[3:])
        elif not await self.handle_conversion(text):
            self.handle_keys(text)
        return True

    async def run(self):
        self._running = True
        self.console.print(Panel(self.BANNER, style="cyan"))
        provider_name = self.provider.name if self.provider else "local"
        self.console.print(f"[dim]Natural language backend: {provider_name}[/dim]")
        self.render_display()
        while self._running:
            try:
                line = await asyncio.to_thread(self.console.input, "[bold cyan]calc>[/bold cyan] ")
            except (EOFError, KeyboardInterrupt):
                logger.info("Input closed")
                break
            self._running = await self.handle_line(line)


def main(config: Optional[Settings] = None) -> int:
    asyncio.run(CalculatorShell(config).run())
    return 0
