#!/usr/bin/env python3
"""
Log, edit, delete and list trades.

Every command rereads the whole journal after a change, so what
is printed is always what is stored.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from tradeanalyzer.core.config import Config
from tradeanalyzer.core.errors import TradeAnalyzerError
from tradeanalyzer.core.models import TradeRecord
from tradeanalyzer.core.store import TradeStore
from tradeanalyzer.core.utils import format_money, setup_logging
from tradeanalyzer.ingest.manual import (
    log_manual_trade,
    parse_amount,
    parse_trade_date,
    parse_trade_type,
)
from tradeanalyzer.review.stats import total_balance

app = typer.Typer(help="Log and manage trades")
console = Console()


def _open_store() -> TradeStore:
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    return TradeStore(config)


def _print_balance(store: TradeStore) -> None:
    trades, settings = store.load_state()
    balance = total_balance(trades, settings.initial_fund)
    console.print(f"Balance: [bold]{format_money(balance, settings.currency)}[/bold]")


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount (positive)"),
    trade_type: str = typer.Option("profit", "--type", "-t", help="profit or loss"),
    date: str = typer.Option("", "--date", "-d", help="Trade date (YYYY-MM-DD), default now"),
    description: str = typer.Option("", "--description", "-m", help="Trade notes"),
):
    """
    Record a new profit or loss.
    """
    try:
        with _open_store() as store:
            trade = log_manual_trade(store, amount, trade_type, date, description)
            console.print(f"[green]Trade #{trade.id} logged.[/green]")
            _print_balance(store)
    except TradeAnalyzerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command()
def edit(
    trade_id: str = typer.Argument(..., help="Trade ID"),
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    trade_type: str = typer.Option(None, "--type", "-t", help="profit or loss"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
    description: str = typer.Option(None, "--description", "-m", help="New notes"),
):
    """
    Change fields of an existing trade.
    """
    try:
        with _open_store() as store:
            current = store.get(trade_id)
            if current is None:
                console.print(f"[red]Trade #{trade_id} not found.[/red]")
                raise typer.Exit(1)

            updated = TradeRecord(
                id=current.id,
                date=parse_trade_date(date) if date else current.date,
                amount=parse_amount(amount) if amount is not None else current.amount,
                type=parse_trade_type(trade_type) if trade_type else current.type,
                description=description if description is not None else current.description,
            )
            store.update(updated, strict=True)
            console.print(f"[green]Trade #{trade_id} updated.[/green]")
            _print_balance(store)
    except TradeAnalyzerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command()
def delete(
    trade_id: str = typer.Argument(..., help="Trade ID"),
):
    """
    Delete a trade.
    """
    try:
        with _open_store() as store:
            if store.delete(trade_id):
                console.print(f"[green]Trade #{trade_id} deleted.[/green]")
            else:
                console.print(f"[yellow]Trade #{trade_id} not found, nothing deleted.[/yellow]")
            _print_balance(store)
    except TradeAnalyzerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command("list")
def list_trades(
    limit: int = typer.Option(20, "--limit", "-l", min=1, help="Number of trades to show"),
):
    """
    Show trade history, most recent first.
    """
    try:
        with _open_store() as store:
            trades, settings = store.load_state()
    except TradeAnalyzerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not trades:
        console.print("No trades logged yet.")
        return

    table = Table(title=f"Trades ({min(limit, len(trades))} of {len(trades)})")
    table.add_column("ID")
    table.add_column("Date")
    table.add_column("Amount", justify="right")
    table.add_column("Description")

    for trade in trades[:limit]:
        color = "green" if trade.is_profit else "red"
        table.add_row(
            trade.id,
            f"{trade.date:%d/%m/%Y}",
            f"[{color}]{format_money(trade.signed_amount, settings.currency, signed=True)}[/{color}]",
            trade.description,
        )

    console.print(table)
    console.print(
        f"Balance: [bold]{format_money(total_balance(trades, settings.initial_fund), settings.currency)}[/bold]"
    )


if __name__ == "__main__":
    app()
