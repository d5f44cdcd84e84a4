"""Base amount commands for managing each currency's budget."""

import sqlite3
import sys

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
)
from indospend.domain.ledger import base_amount_from_record, total_base
from indospend.domain.models import Currency, Money
from indospend.store.queries import (
    delete_base_amount,
    get_all_base_amounts,
    get_base_amount,
    insert_base_amount,
    update_base_amount,
)


def base_add_command(amount: str, label: str = "", currency: str | None = None) -> None:
    """Add a base amount entry to a currency's budget."""
    db_path = require_database()
    target_currency = resolve_currency(currency)
    value = require_amount(amount)

    try:
        entry_id = insert_base_amount(value, target_currency, label, db_path)
        entries = [base_amount_from_record(r) for r in get_all_base_amounts(db_path, currency=target_currency)]
    except sqlite3.Error as e:
        exit_on_database_error(e)

    display = f"{escape(label)}: " if label else ""
    console.print(f"[green]✓[/green] Base amount added (ID: {entry_id}): {display}{format_money(value, target_currency)}")
    budget = total_base(entries, target_currency)
    console.print(f"[dim]Total {target_currency.value} budget: {format_money(budget, target_currency)}[/dim]")


def base_list_command(currency: str | None = None) -> None:
    """List base amount entries for a currency."""
    db_path = require_database()
    target_currency = resolve_currency(currency)

    try:
        records = get_all_base_amounts(db_path, currency=target_currency)
    except sqlite3.Error as e:
        exit_on_database_error(e)

    if not records:
        console.print(f"[yellow]No {target_currency.value} base amounts set[/yellow]")
        console.print("[dim]Use 'indospend base add <amount>' to set a budget[/dim]")
        return

    table = Table(title=f"{target_currency.value} Base Amounts")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Label", style="white")
    table.add_column("Amount", justify="right")

    for record in records:
        table.add_row(str(record["id"]), describe(record, "label"), format_money(record["amount"], target_currency))

    console.print(table)

    budget = total_base([base_amount_from_record(r) for r in records], target_currency)
    console.print(f"\n[bold]Total budget:[/bold] {format_money(budget, target_currency)}")


def base_edit_command(entry_id: int, amount: str | None = None, label: str | None = None) -> None:
    """Change a base amount entry's amount and/or label."""
    db_path = require_database()

    try:
        record = get_base_amount(entry_id, db_path)
        if record is None:
            console.print(f"[red]Base amount {entry_id} not found[/red]")
            sys.exit(1)

        if amount is None and label is None:
            console.print("[yellow]Nothing to change (use --amount and/or --label)[/yellow]")
            return

        new_amount = record["amount"]
        if amount is not None:
            parsed = parse_amount(amount)
            if parsed is None:
                console.print(f"[red]Invalid amount: {escape(amount)}[/red]")
                sys.exit(1)
            new_amount = parsed
        new_label = record["label"] if label is None else label

        update_base_amount(entry_id, Money(new_amount), new_label, db_path)

    except sqlite3.Error as e:
        exit_on_database_error(e)

    currency = Currency(record["currency"])
    display = f"{escape(new_label)}: " if new_label else ""
    console.print(f"[green]✓[/green] Updated base amount {entry_id}: {display}{format_money(new_amount, currency)}")


def base_delete_command(entry_id: int, yes: bool = False) -> None:
    """Delete a base amount entry after confirmation."""
    db_path = require_database()

    try:
        record = get_base_amount(entry_id, db_path)
        if record is None:
            console.print(f"[red]Base amount {entry_id} not found[/red]")
            sys.exit(1)

        currency = Currency(record["currency"])
        if not yes and not typer.confirm(
            f"Delete base amount {entry_id} ({format_money(record['amount'], currency)})?", default=False
        ):
            console.print("[dim]Cancelled[/dim]")
            return

        delete_base_amount(entry_id, db_path)

    except sqlite3.Error as e:
        exit_on_database_error(e)

    console.print(f"[green]✓[/green] Deleted base amount {entry_id}")
