"""Admin commands for init, backup, restore, theme, and configuration."""

import sqlite3
import tomllib
from datetime import datetime
from pathlib import Path

import typer
from rich.markup import escape

from spendlog.commands.common import console, fail, open_ledger
from spendlog.config import create_default_config, get_config_path, get_settings, load_config, save_config
from spendlog.domain.backup import dump_backup
from spendlog.domain.errors import LedgerError
from spendlog.store.schema import init_database

BACKUP_FILENAME = "expense_tracker_backup.json"


def init_command(force: bool = False) -> None:
    """Initialize spendlog database and configuration."""
    config_path = get_config_path()

    try:
        if config_path.exists() and not force:
            console.print("[red]Initialization failed:[/red]", style="bold")
            console.print(f"  Config already exists: {escape(str(config_path))}")
            console.print("\n[yellow]Use 'spendlog init --force' to overwrite[/yellow]")
            raise typer.Exit(1)

        console.print(f"[cyan]Creating config file at {escape(str(config_path))}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        db_path = get_settings(config_path).db_path
        console.print(f"[cyan]Initializing database at {escape(str(db_path))}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        console.print("\n[green]Initialization complete![/green]", style="bold")
        console.print(f"[dim]Database: {escape(str(db_path))}[/dim]")
        console.print(f"[dim]Config: {escape(str(config_path))}[/dim]")

    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    except OSError as e:
        fail(f"Filesystem error: {e}")


def config_command(currency: str | None = None, db_path: str | None = None) -> None:
    """Show or update configuration values."""
    config_path = get_config_path()

    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}
    except tomllib.TOMLDecodeError as e:
        fail(f"Config file is invalid: {e}")

    if currency is None and db_path is None:
        settings = get_settings(config_path)
        console.print(f"Config:   {escape(str(config_path))}")
        console.print(f"Currency: {escape(settings.currency)}")
        console.print(f"Database: {escape(str(settings.db_path))}")
        return

    if currency is not None:
        config["currency"] = currency
    if db_path is not None:
        config["db_path"] = str(Path(db_path).expanduser())

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        save_config(config, config_path)
    except OSError as e:
        fail(f"Filesystem error: {e}")

    console.print("[green]✓[/green] Configuration saved")


def backup_command(output: str | None = None) -> None:
    """Write every transaction, category, and the budget limit to a JSON file."""
    ledger = open_ledger()
    path = Path(output).expanduser() if output else Path(BACKUP_FILENAME)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_backup(ledger.backup(datetime.now().astimezone())), encoding="utf-8")
    except OSError as e:
        fail(f"Backup failed: {e}")

    console.print(f"[green]✓[/green] Backup file saved successfully: {escape(str(path))}")
    console.print(f"[dim]{len(ledger.store)} transactions[/dim]")


def restore_command(backup_file: str, yes: bool = False) -> None:
    """Replace all data with the contents of a backup file."""
    path = Path(backup_file).expanduser()

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        fail(f"Cannot read backup file: {e}")

    ledger = open_ledger()

    if not yes and not typer.confirm(
        "This will OVERWRITE your current data with the backup file. Are you sure?", default=False
    ):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        backup = ledger.restore_text(text)
    except LedgerError as e:
        fail(f"Error: Invalid Backup File ({e})")
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Data restored successfully: {len(backup.transactions)} transactions")
    if backup.last_backup:
        console.print(f"[dim]Backup taken {escape(backup.last_backup)}[/dim]")


def theme_command(theme: str | None = None) -> None:
    """Show or set the preferred theme."""
    ledger = open_ledger()

    if theme is None:
        console.print(f"Theme: {ledger.theme}")
        return

    try:
        ledger.set_theme(theme)
    except LedgerError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Theme set to {theme}")
