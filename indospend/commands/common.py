"""Helpers shared by the command modules."""

import math
import sqlite3
import sys
from pathlib import Path
from typing import Any, NoReturn

from rich.console import Console
from rich.markup import escape

from indospend.config import get_default_currency
from indospend.domain.ledger import BaseAmount, Expense, base_amount_from_record, expense_from_record
from indospend.domain.models import Currency, Money, parse_currency
from indospend.store.queries import get_all_base_amounts, get_all_expenses
from indospend.store.schema import database_exists, get_db_path

console = Console()


def require_database() -> Path:
    """Get the database path, exiting if 'indospend init' has not been run."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'indospend init' first.[/red]", style="bold")
        sys.exit(1)
    return db_path


def resolve_currency(currency: str | None) -> Currency:
    """Resolve a --currency option, falling back to the configured default."""
    try:
        if currency:
            return parse_currency(currency)
        return get_default_currency()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def parse_amount(amount_str: str) -> Money | None:
    """Parse a user-entered amount.

    Args:
        amount_str: Amount text, optionally with thousands separators.

    Returns:
        Money amount, or None if invalid, non-finite or negative.
    """
    try:
        value = float(amount_str.replace(",", "").strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return Money(value)


def require_amount(amount_str: str) -> Money:
    """Parse an amount argument, exiting with an error if it is invalid."""
    amount = parse_amount(amount_str)
    if amount is None:
        console.print(f"[red]Invalid amount: {escape(amount_str)}[/red]")
        console.print("[dim]Amounts must be non-negative numbers, e.g. 12.50 or 1,250[/dim]")
        sys.exit(1)
    return amount


def format_money(amount: float, currency: Currency) -> str:
    """Format an amount for display (e.g. "1,250.00 IDR" or "-3.50 SGD")."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{abs(amount):,.2f} {currency.value}"


def load_snapshot(db_path: Path, currency: Currency) -> tuple[list[Expense], list[BaseAmount]]:
    """Read the current expenses and base amounts for a currency."""
    expenses = [expense_from_record(r) for r in get_all_expenses(db_path, currency=currency)]
    base_amounts = [base_amount_from_record(r) for r in get_all_base_amounts(db_path, currency=currency)]
    return expenses, base_amounts


def exit_on_database_error(e: sqlite3.Error) -> NoReturn:
    """Report a database failure and exit."""
    console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
    sys.exit(1)


def show_text(text: str | None) -> str:
    """Escape user-entered text for rich markup, dimmed dash when empty."""
    return escape(text) if text else "[dim]-[/dim]"


def describe(record: dict[str, Any], key: str) -> str:
    """Get a text field from a store row for display."""
    return show_text(record.get(key))
