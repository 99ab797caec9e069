#!/usr/bin/env python3
"""
Backup and restore the journal.

Export writes every trade and the settings to a JSON file.
Import REPLACES all trades with the file's content.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Confirm

from tradeanalyzer.backup.codec import restore_backup, write_backup
from tradeanalyzer.core.config import Config
from tradeanalyzer.core.errors import TradeAnalyzerError
from tradeanalyzer.core.store import TradeStore
from tradeanalyzer.core.utils import setup_logging

app = typer.Typer(help="Backup and restore")
console = Console()


def _load_config() -> Config:
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    return config


@app.command("export")
def export_backup(
    directory: str = typer.Option(None, "--dir", "-d", help="Backup directory"),
):
    """
    Export all trades and settings to a JSON backup.
    """
    config = _load_config()

    try:
        with TradeStore(config) as store:
            path = write_backup(store, directory or config.backup_dir)
    except (TradeAnalyzerError, OSError) as e:
        console.print(f"[red]Backup failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Backup created: {path}[/green]")


@app.command("import")
def import_backup(
    filepath: str = typer.Argument(..., help="Backup JSON file"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """
    Restore a JSON backup, replacing all current trades.
    """
    config = _load_config()

    if not yes and not Confirm.ask(
        "This replaces ALL current trades. Continue?", console=console, default=False
    ):
        console.print("Import cancelled.")
        raise typer.Exit(0)

    try:
        with TradeStore(config) as store:
            snapshot = restore_backup(store, filepath)
    except TradeAnalyzerError as e:
        console.print(f"[red]Import failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Imported {len(snapshot.trades)} trades.[/green]")


if __name__ == "__main__":
    app()
