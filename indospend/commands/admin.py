"""Admin commands for init and backup."""

import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from rich.markup import escape

from indospend.commands.common import console
from indospend.config import create_default_config, get_config_path
from indospend.store.schema import get_db_path, init_database


def backup_command(output_dir: str | None = None) -> Path:
    """Copy the database and config into a timestamped backup.

    Returns:
        Backup directory used.
    """
    db_path = get_db_path()
    config_path = get_config_path()

    if not db_path.exists():
        console.print("[red]Database not found. Run 'indospend init' first.[/red]", style="bold")
        sys.exit(1)

    backup_dir = Path(output_dir).expanduser() if output_dir else db_path.parent / "backups"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)
        db_backup = backup_dir / f"indospend_{timestamp}.db"
        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {escape(str(db_backup))}")

        # Config is optional; defaults apply without it
        if config_path.exists():
            config_backup = backup_dir / f"config_{timestamp}.toml"
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {escape(str(config_backup))}")

    except OSError as e:
        console.print(f"[red]Backup failed: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Backup complete![/green]", style="bold")
    return backup_dir


def init_command(force: bool = False, migrate: bool = False) -> None:
    """Initialize indospend database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        if migrate:
            if not db_exists:
                console.print("[red]No database found to migrate[/red]", style="bold")
                console.print(f"[dim]Expected location: {escape(str(db_path))}[/dim]")
                sys.exit(1)
            console.print(f"[cyan]Running migrations on {escape(str(db_path))}...[/cyan]")
            init_database(db_path)
            console.print("[green]✓[/green] Database schema is up to date")
            return

        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {escape(str(db_path))}")
            if config_exists:
                console.print(f"  Config already exists: {escape(str(config_path))}")
            console.print("\n[yellow]Use 'indospend init --force' to overwrite[/yellow]")
            console.print("[yellow]Or 'indospend init --migrate' to update database schema only[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()

        init_database(db_path)
        console.print(f"[green]✓[/green] Database initialized at {escape(str(db_path))}")

        create_default_config(config_path)
        console.print(f"[green]✓[/green] Config file created at {escape(str(config_path))} (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
