#!/usr/bin/env python3
"""
Journal settings CLI.

View and change the initial fund and display currency.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import typer
from dotenv import load_dotenv
from rich.console import Console

from tradeanalyzer.core.config import Config
from tradeanalyzer.core.errors import TradeAnalyzerError
from tradeanalyzer.core.models import Currency
from tradeanalyzer.core.store import TradeStore
from tradeanalyzer.core.utils import format_money, setup_logging
from tradeanalyzer.ingest.manual import parse_amount

app = typer.Typer(help="Trade Analyzer settings")
console = Console()


def _load_config() -> Config:
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    return config


@app.command()
def show():
    """Show current settings."""
    config = _load_config()

    try:
        with TradeStore(config) as store:
            _, settings = store.load_state()
    except TradeAnalyzerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"Initial fund: {format_money(settings.initial_fund, settings.currency)}")
    console.print(f"Currency: {settings.currency.value} ({settings.currency.symbol})")
    console.print()
    typer.echo(config.get_summary())


@app.command("set")
def set_settings(
    initial_fund: str = typer.Option(None, "--fund", "-f", help="Initial fund"),
    currency: str = typer.Option(None, "--currency", "-c", help="USD, EUR or MGA"),
):
    """Change the initial fund and/or currency."""
    config = _load_config()

    try:
        with TradeStore(config) as store:
            _, current = store.load_state()

            new_currency = current.currency
            if currency:
                try:
                    new_currency = Currency(currency.upper())
                except ValueError:
                    choices = ", ".join(c.value for c in Currency)
                    console.print(f"[red]Unknown currency {currency!r}. Choose from {choices}.[/red]")
                    raise typer.Exit(1)

            new_fund = parse_amount(initial_fund) if initial_fund else current.initial_fund

            settings = store.update_settings(new_fund, new_currency)
    except TradeAnalyzerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]Settings saved: {format_money(settings.initial_fund, settings.currency)}"
        f" ({settings.currency.value})[/green]"
    )


if __name__ == "__main__":
    app()
