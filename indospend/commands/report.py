"""Status, chart, and conversion rate commands."""

import sqlite3
import sys

from rich.markup import escape

from indospend.commands.common import (
    console,
    exit_on_database_error,
    format_money,
    load_snapshot,
    require_database,
    resolve_currency,
)
from indospend.config import get_conversion_rate, set_conversion_rate
from indospend.dates import format_day
from indospend.domain.ledger import (
    LedgerSummary,
    calculate_histogram_bar_length,
    compute_ledger_summary,
    convert_sgd_to_idr,
    group_by_day,
)
from indospend.domain.models import Currency, Money

URGENCY_COLORS = {
    "healthy": "green",
    "warning": "yellow",
    "critical": "red",
}


def render_summary(summary: LedgerSummary, rate: float) -> None:
    """Render a ledger summary to the console.

    Args:
        summary: Aggregates for one currency.
        rate: SGD to IDR conversion rate, used to show the IDR equivalent of SGD figures.
    """
    currency = summary.currency
    color = URGENCY_COLORS[summary.urgency]

    console.print(f"[bold cyan]{currency.value} Balance[/bold cyan]\n")
    console.print(f"[bold]Budget:[/bold]            {format_money(summary.total_base, currency)}")
    console.print(f"[bold]Spent:[/bold]             {format_money(summary.total_spent, currency)}")

    if summary.remaining < 0:
        console.print(
            f"[bold]Overspent:[/bold]         [red]{format_money(abs(summary.remaining), currency)}[/red]"
        )
    else:
        console.print(f"[bold]Remaining:[/bold]         [{color}]{format_money(summary.remaining, currency)}[/{color}]")

    console.print(f"[bold]Left of budget:[/bold]    [{color}]{summary.ratio:.0%} ({summary.urgency})[/{color}]")

    if summary.expense_days:
        console.print(
            f"[bold]Daily average:[/bold]     {format_money(summary.average_daily, currency)}"
            f" [dim]over {summary.expense_days} day(s)[/dim]"
        )

    if currency == Currency.SGD:
        idr_remaining = convert_sgd_to_idr(summary.remaining, rate)
        console.print(f"\n[dim]≈ {format_money(idr_remaining, Currency.IDR)} remaining at {rate:,.0f} IDR/SGD[/dim]")

    if summary.total_base == 0:
        console.print("\n[dim]Tip: Use 'indospend base add <amount>' to set a budget[/dim]")


def status_command(currency: str | None = None) -> None:
    """Show budget, spending, and remaining balance for a currency."""
    db_path = require_database()
    target_currency = resolve_currency(currency)

    try:
        rate = get_conversion_rate()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    try:
        expenses, base_amounts = load_snapshot(db_path, target_currency)
    except sqlite3.Error as e:
        exit_on_database_error(e)

    render_summary(compute_ledger_summary(expenses, base_amounts, target_currency), rate)


def chart_command(currency: str | None = None, width: int = 40) -> None:
    """Show daily spending as a bar chart."""
    db_path = require_database()
    target_currency = resolve_currency(currency)

    try:
        expenses, _ = load_snapshot(db_path, target_currency)
    except sqlite3.Error as e:
        exit_on_database_error(e)

    daily = group_by_day(expenses)

    console.print(f"[bold cyan]Spending Chart - {target_currency.value}[/bold cyan]\n")
    if not daily:
        console.print("[dim]No expenses to display[/dim]")
        return

    max_total = Money(max(day.total for day in daily))
    for day in daily:
        bar = "█" * calculate_histogram_bar_length(day.total, max_total, width)
        console.print(f"  {format_day(day.date):8} {format_money(day.total, target_currency):>18} [red]{bar}[/red]")


def rate_command(new_rate: float | None = None) -> None:
    """Show or set the SGD to IDR conversion rate."""
    try:
        if new_rate is not None:
            set_conversion_rate(new_rate)
            console.print(f"[green]✓[/green] Conversion rate set: 1 SGD = {new_rate:,.2f} IDR")
            return

        rate = get_conversion_rate()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print(f"1 SGD = {rate:,.2f} IDR")
