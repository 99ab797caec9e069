#!/usr/bin/env python3
"""
Journal review script.

Shows balance, weekly and monthly summaries, performance
statistics and the balance curve.
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
from tradeanalyzer.core.store import TradeStore
from tradeanalyzer.core.utils import format_money, setup_logging
from tradeanalyzer.review.report import export_review, format_summary
from tradeanalyzer.review.stats import JournalView, build_view, recent_periods

app = typer.Typer(help="Journal review")
console = Console()

BAR_WIDTH = 40


def _load_view() -> JournalView:
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)

    try:
        with TradeStore(config) as store:
            trades, settings = store.load_state()
    except TradeAnalyzerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    return build_view(trades, settings)


def _bucket_table(title: str, buckets, currency) -> Table:
    table = Table(title=title)
    table.add_column("Period")
    table.add_column("Profit", justify="right", style="green")
    table.add_column("Loss", justify="right", style="red")
    table.add_column("Net", justify="right")
    table.add_column("Trades", justify="right")

    for key, bucket in buckets.items():
        color = "green" if bucket.net >= 0 else "red"
        table.add_row(
            key,
            format_money(bucket.profit_total, currency, signed=True),
            format_money(-bucket.loss_total, currency, signed=True),
            f"[{color}]{format_money(bucket.net, currency, signed=True)}[/{color}]",
            str(bucket.count),
        )

    return table


@app.command()
def balance():
    """
    Show the current balance.
    """
    view = _load_view()
    currency = view.settings.currency

    console.print(f"Total balance: [bold]{format_money(view.balance, currency)}[/bold]")
    console.print(f"Initial fund: {format_money(view.settings.initial_fund, currency)}")


@app.command()
def weekly(
    limit: int = typer.Option(4, "--limit", "-l", min=1, help="Number of recent weeks"),
):
    """
    Profit and loss per week, most recent weeks.
    """
    view = _load_view()
    if not view.trades:
        console.print("No trades logged yet.")
        return
    weeks = recent_periods(view.weekly, limit)
    console.print(_bucket_table("Weekly Summary", weeks, view.settings.currency))


@app.command()
def monthly(
    limit: int = typer.Option(4, "--limit", "-l", min=1, help="Number of recent months"),
):
    """
    Profit and loss per month, most recent months.
    """
    view = _load_view()
    if not view.trades:
        console.print("No trades logged yet.")
        return
    months = recent_periods(view.monthly, limit)
    console.print(_bucket_table("Monthly Summary", months, view.settings.currency))


@app.command()
def stats():
    """
    Win rate, profit factor and totals.
    """
    view = _load_view()
    for line in format_summary(view.summary, view.settings.currency):
        console.print(line)


@app.command()
def chart(
    months: int = typer.Option(6, "--months", "-m", min=1, help="Months in the bar chart"),
):
    """
    Balance curve and monthly profit/loss bars.
    """
    view = _load_view()
    currency = view.settings.currency

    if not view.trades:
        console.print("No data to chart yet.")
        return

    console.print("[bold]Balance[/bold]")
    for point in view.balance_series:
        console.print(f"  {point.index:>4}  {point.date:%d/%m/%Y}  {format_money(point.balance, currency)}")

    bars = recent_periods(view.monthly, months)
    scale = max((max(b.profit_total, b.loss_total) for b in bars.values()), default=0) or 1.0

    console.print("\n[bold]Monthly profit / loss[/bold]")
    for key, bucket in bars.items():
        profit_bar = "#" * round(bucket.profit_total / scale * BAR_WIDTH)
        loss_bar = "#" * round(bucket.loss_total / scale * BAR_WIDTH)
        console.print(f"  {key}  [green]{profit_bar}[/green] {format_money(bucket.profit_total, currency)}")
        console.print(f"  {' ' * len(key)}  [red]{loss_bar}[/red] {format_money(bucket.loss_total, currency)}")


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """
    Write the full review to a text file.
    """
    view = _load_view()
    config = Config.from_env()

    filepath = export_review(view, config.backup_dir, output)
    console.print(f"[green]Review exported to {filepath}[/green]")


if __name__ == "__main__":
    app()
