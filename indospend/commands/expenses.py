"""Expense commands: manual entry, receipt scans, spoken input, list, edit, delete."""

import json
import sqlite3
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import typer
from rich.markup import escape
from rich.table import Table

from indospend.commands.common import (
    console,
    describe,
    exit_on_database_error,
    format_money,
    parse_amount,
    require_amount,
    require_database,
    resolve_currency,
    show_text,
)
from indospend.dates import parse_user_date
from indospend.domain.models import Currency, Money
from indospend.domain.receipt import parse_ocr_payload, scan_receipt
from indospend.domain.transcript import parse_transcript
from indospend.store.queries import delete_expense, get_all_expenses, get_expense, insert_expense, update_expense


def record_expense(
    amount: Money,
    description: str,
    currency: Currency,
    db_path: Path,
    date: datetime | None = None,
) -> int:
    """Save an expense and print a confirmation.

    Returns:
        ID of the new expense.
    """
    try:
        expense_id = insert_expense(amount, description, currency, date, db_path)
    except sqlite3.Error as e:
        exit_on_database_error(e)

    console.print(f"[green]✓[/green] Expense added (ID: {expense_id}):")
    console.print(f"  Amount: {format_money(amount, currency)}")
    console.print(f"  Description: {show_text(description)}")
    if date is not None:
        console.print(f"  Date: {date:%Y-%m-%d %H:%M}")
    return expense_id


def add_command(amount: str, description: str, currency: str | None = None, date: str | None = None) -> None:
    """Add an expense manually.

    Args:
        amount: Amount in major units (e.g. "12.50" or "1,250").
        description: Expense description.
        currency: Currency code. If None, uses the configured default.
        date: Optional date (YYYY-MM-DD, DD/MM/YYYY, ...). Defaults to now.
    """
    db_path = require_database()
    target_currency = resolve_currency(currency)
    value = require_amount(amount)

    when = None
    if date:
        try:
            when = parse_user_date(date)
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
            sys.exit(1)

    record_expense(value, description, target_currency, db_path, when)


def load_ocr_file(path: Path) -> list[Any]:
    """Load recognized OCR lines from a JSON file.

    The file holds either a list of lines or an object with a "lines" list.

    Raises:
        ValueError: If the file is not valid JSON in one of those shapes.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid OCR file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("lines")
    if not isinstance(data, list):
        raise ValueError(f"Invalid OCR file {path}: expected a list of recognized lines")
    return data


def scan_command(ocr_file: str, currency: str | None = None, dry_run: bool = False) -> None:
    """Create an expense from receipt OCR output.

    Args:
        ocr_file: JSON file of recognized text lines.
        currency: Currency code. If None, uses the configured default.
        dry_run: Show the parsed result without saving it.
    """
    target_currency = resolve_currency(currency)

    try:
        raw_lines = load_ocr_file(Path(ocr_file).expanduser())
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read OCR output: {escape(str(e))}[/red]")
        sys.exit(1)

    lines = parse_ocr_payload(raw_lines)
    result = scan_receipt(lines)

    console.print(f"[cyan]Recognized {len(lines)} line(s)[/cyan]")
    if result.amount == 0:
        console.print("[yellow]No total found on the receipt; amount set to 0[/yellow]")

    if dry_run:
        console.print(f"  Amount: {format_money(result.amount, target_currency)}")
        console.print(f"  Description: {show_text(result.title)}")
        console.print("[dim]Dry run: nothing saved[/dim]")
        return

    record_expense(result.amount, result.title, target_currency, require_database())


def say_command(transcript: str, currency: str | None = None, dry_run: bool = False) -> None:
    """Create an expense from a speech transcript such as "12.50 coffee with friends".

    Args:
        transcript: Full speech-to-text output.
        currency: Currency code. If None, uses the configured default.
        dry_run: Show the parsed result without saving it.
    """
    target_currency = resolve_currency(currency)
    spoken = parse_transcript(transcript)

    if spoken.amount == 0:
        console.print("[yellow]No amount heard at the start of the transcript; amount set to 0[/yellow]")

    if dry_run:
        console.print(f"  Amount: {format_money(spoken.amount, target_currency)}")
        console.print(f"  Description: {show_text(spoken.description)}")
        console.print("[dim]Dry run: nothing saved[/dim]")
        return

    record_expense(spoken.amount, spoken.description, target_currency, require_database())


def list_command(currency: str | None = None, limit: int = 50, all: bool = False) -> None:
    """List expenses for a currency, newest first."""
    db_path = require_database()
    target_currency = resolve_currency(currency)

    try:
        expenses = get_all_expenses(db_path, currency=target_currency, limit=None if all else limit)
    except sqlite3.Error as e:
        exit_on_database_error(e)

    if not expenses:
        console.print(f"[yellow]No {target_currency.value} expenses found[/yellow]")
        return

    table = Table(title=f"{target_currency.value} Expenses (showing {len(expenses)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")

    for expense in expenses:
        table.add_row(
            str(expense["id"]),
            datetime.fromisoformat(expense["date"]).strftime("%Y-%m-%d %H:%M"),
            describe(expense, "description"),
            f"[red]{format_money(expense['amount'], target_currency)}[/red]",
        )

    console.print(table)


def edit_command(expense_id: int, amount: str | None = None, description: str | None = None) -> None:
    """Change an expense's amount and/or description."""
    db_path = require_database()

    try:
        expense = get_expense(expense_id, db_path)
        if expense is None:
            console.print(f"[red]Expense {expense_id} not found[/red]")
            sys.exit(1)

        if amount is None and description is None:
            console.print("[yellow]Nothing to change (use --amount and/or --description)[/yellow]")
            return

        new_amount = expense["amount"]
        if amount is not None:
            parsed = parse_amount(amount)
            if parsed is None:
                console.print(f"[red]Invalid amount: {escape(amount)}[/red]")
                sys.exit(1)
            new_amount = parsed
        new_description = expense["description"] if description is None else description

        update_expense(expense_id, Money(new_amount), new_description, db_path)

    except sqlite3.Error as e:
        exit_on_database_error(e)

    currency = Currency(expense["currency"])
    console.print(f"[green]✓[/green] Updated expense {expense_id}:")
    console.print(f"  Amount: {format_money(new_amount, currency)}")
    console.print(f"  Description: {show_text(new_description)}")


def delete_command(expense_id: int, yes: bool = False) -> None:
    """Delete an expense after confirmation."""
    db_path = require_database()

    try:
        expense = get_expense(expense_id, db_path)
        if expense is None:
            console.print(f"[red]Expense {expense_id} not found[/red]")
            sys.exit(1)

        currency = Currency(expense["currency"])
        summary = f"{format_money(expense['amount'], currency)} {expense['description']}".rstrip()
        if not yes and not typer.confirm(f"Delete expense {expense_id} ({summary})?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        delete_expense(expense_id, db_path)

    except sqlite3.Error as e:
        exit_on_database_error(e)

    console.print(f"[green]✓[/green] Deleted expense {expense_id}")
