"""CLI entry point for indospend."""

import typer

from indospend.commands.admin import backup_command, init_command
from indospend.commands.base import base_add_command, base_delete_command, base_edit_command, base_list_command
from indospend.commands.expenses import (
    add_command,
    delete_command,
    edit_command,
    list_command,
    say_command,
    scan_command,
)
from indospend.commands.report import chart_command, rate_command, status_command

CURRENCY_HELP = "Currency (SGD or IDR, default from config)"

app = typer.Typer(
    name="indospend",
    help="IndoSpend - track expenses in SGD and IDR against your budget",
    add_completion=False,
)

base_app = typer.Typer(help="Manage the base amounts that make up each currency's budget.")
app.add_typer(base_app, name="base")


@app.callback()
def main() -> None:
    """IndoSpend - track expenses in SGD and IDR against your budget."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    migrate: bool = typer.Option(False, "--migrate", help="Update the database schema only"),
) -> None:
    """Initialize indospend database and configuration."""
    init_command(force, migrate)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command()
def add(
    amount: str,
    description: str = typer.Argument("", help="What the money was spent on"),
    currency: str = typer.Option(None, "--currency", "-c", help=CURRENCY_HELP),
    date: str = typer.Option(None, "--date", "-d", help="Expense date (default: now)"),
) -> None:
    """Add an expense manually."""
    add_command(amount, description, currency, date)


@app.command()
def scan(
    ocr_file: str = typer.Argument(..., help="JSON file with the recognized receipt lines"),
    currency: str = typer.Option(None, "--currency", "-c", help=CURRENCY_HELP),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the parsed expense without saving"),
) -> None:
    """Add an expense from receipt OCR output."""
    scan_command(ocr_file, currency, dry_run)


@app.command()
def say(
    transcript: str = typer.Argument(..., help='Spoken transcript, e.g. "12.50 coffee with friends"'),
    currency: str = typer.Option(None, "--currency", "-c", help=CURRENCY_HELP),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the parsed expense without saving"),
) -> None:
    """Add an expense from a speech transcript."""
    say_command(transcript, currency, dry_run)


@app.command(name="list")
def list_expenses(
    currency: str = typer.Option(None, "--currency", "-c", help=CURRENCY_HELP),
    limit: int = typer.Option(50, help="Maximum expenses to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your expenses"),
) -> None:
    """List your expenses, newest first."""
    list_command(currency, limit, all)


@app.command()
def edit(
    expense_id: int,
    amount: str = typer.Option(None, "--amount", help="New amount"),
    description: str = typer.Option(None, "--description", help="New description"),
) -> None:
    """Edit an expense's amount or description."""
    edit_command(expense_id, amount, description)


@app.command()
def delete(
    expense_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete an expense."""
    delete_command(expense_id, yes)


@base_app.command(name="add")
def base_add(
    amount: str,
    label: str = typer.Option("", "--label", "-l", help="Optional label, e.g. 'Salary'"),
    currency: str = typer.Option(None, "--currency", "-c", help=CURRENCY_HELP),
) -> None:
    """Add a base amount to a currency's budget."""
    base_add_command(amount, label, currency)


@base_app.command(name="list")
def base_list(
    currency: str = typer.Option(None, "--currency", "-c", help=CURRENCY_HELP),
) -> None:
    """List base amounts and the total budget."""
    base_list_command(currency)


@base_app.command(name="edit")
def base_edit(
    entry_id: int,
    amount: str = typer.Option(None, "--amount", help="New amount"),
    label: str = typer.Option(None, "--label", "-l", help="New label"),
) -> None:
    """Edit a base amount."""
    base_edit_command(entry_id, amount, label)


@base_app.command(name="delete")
def base_delete(
    entry_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a base amount."""
    base_delete_command(entry_id, yes)


@app.command()
def status(
    currency: str = typer.Option(None, "--currency", "-c", help=CURRENCY_HELP),
) -> None:
    """Show your budget, spending, and remaining balance."""
    status_command(currency)


@app.command()
def chart(
    currency: str = typer.Option(None, "--currency", "-c", help=CURRENCY_HELP),
    width: int = typer.Option(40, help="Maximum bar width in characters"),
) -> None:
    """Show your daily spending as a bar chart."""
    chart_command(currency, width)


@app.command()
def rate(
    set_rate: float = typer.Option(None, "--set", help="New rate (IDR per SGD)"),
) -> None:
    """Show or set the SGD to IDR conversion rate."""
    rate_command(set_rate)


if __name__ == "__main__":
    app()
