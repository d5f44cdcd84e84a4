"""Pure functions for ledger calculations and aggregations.

This module contains the functional core for balance reporting:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations over snapshots handed in by the caller
- Easy to test

All monetary amounts are in major units of their currency (Money type).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from indospend.dates import start_of_day
from indospend.domain.models import Currency, Description, Money

DEFAULT_CONVERSION_RATE = 10500.0  # IDR per SGD

HEALTHY_RATIO = 0.5
WARNING_RATIO = 0.2


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    id: int
    amount: Money
    description: Description
    date: datetime
    currency: Currency


@dataclass(frozen=True)
class BaseAmount:
    """Immutable budget contribution for a currency."""

    id: int
    currency: Currency
    amount: Money
    label: str = ""


@dataclass(frozen=True)
class DailySpending:
    """Immutable total spent on one calendar day."""

    date: datetime
    total: Money


@dataclass(frozen=True)
class LedgerSummary:
    """Immutable aggregate view of one currency's ledger."""

    currency: Currency
    total_base: Money
    total_spent: Money
    remaining: Money
    ratio: float
    urgency: str
    average_daily: Money
    expense_days: int


def expense_from_record(record: dict[str, Any]) -> Expense:
    """Build an Expense from a store row.

    Args:
        record: Row dictionary with id, amount, description, date, currency.

    Returns:
        Expense with parsed date and currency.
    """
    date = record["date"]
    if isinstance(date, str):
        date = datetime.fromisoformat(date)

    return Expense(
        id=int(record["id"]),
        amount=Money(float(record["amount"])),
        description=Description(record.get("description") or ""),
        date=date,
        currency=Currency(record["currency"]),
    )


def base_amount_from_record(record: dict[str, Any]) -> BaseAmount:
    """Build a BaseAmount from a store row."""
    return BaseAmount(
        id=int(record["id"]),
        currency=Currency(record["currency"]),
        amount=Money(float(record["amount"])),
        label=record.get("label") or "",
    )


def filter_by_currency(expenses: list[Expense], currency: Currency) -> list[Expense]:
    """Keep only expenses recorded in a currency."""
    return [e for e in expenses if e.currency == currency]


def total_spent(expenses: list[Expense], currency: Currency) -> Money:
    """Calculate total spent in a currency.

    Args:
        expenses: Expense snapshot (any currencies).
        currency: Currency to total.

    Returns:
        Sum of matching expense amounts.
    """
    return Money(sum(e.amount for e in expenses if e.currency == currency))


def total_base(base_amounts: list[BaseAmount], currency: Currency) -> Money:
    """Calculate the budget for a currency (sum of its base amount entries).

    Args:
        base_amounts: Base amount snapshot (any currencies).
        currency: Currency to total.

    Returns:
        Sum of matching base amounts.
    """
    return Money(sum(b.amount for b in base_amounts if b.currency == currency))


def remaining_balance(expenses: list[Expense], base_amounts: list[BaseAmount], currency: Currency) -> Money:
    """Calculate remaining balance (budget minus spending).

    Returns:
        Remaining balance; negative when overspent.
    """
    return Money(total_base(base_amounts, currency) - total_spent(expenses, currency))


def calculate_ratio(remaining: Money, base: Money) -> float:
    """Calculate the remaining-to-budget ratio.

    Args:
        remaining: Remaining balance.
        base: Total budget.

    Returns:
        remaining / base clamped to [0, 1], or 1.0 when there is no budget.
    """
    if base == 0:
        return 1.0
    return min(1.0, max(0.0, remaining / base))


def balance_ratio(expenses: list[Expense], base_amounts: list[BaseAmount], currency: Currency) -> float:
    """Calculate the remaining-to-budget ratio for a currency."""
    base = total_base(base_amounts, currency)
    return calculate_ratio(Money(base - total_spent(expenses, currency)), base)


def urgency_level(ratio: float) -> str:
    """Bucket a ratio into an urgency level.

    Args:
        ratio: Remaining-to-budget ratio.

    Returns:
        "healthy" above 0.5, "warning" above 0.2, otherwise "critical".
    """
    if ratio > HEALTHY_RATIO:
        return "healthy"
    elif ratio > WARNING_RATIO:
        return "warning"
    else:
        return "critical"


def group_by_day(expenses: list[Expense]) -> list[DailySpending]:
    """Group expenses by local calendar day.

    Args:
        expenses: Expenses to group (callers filter by currency first).

    Returns:
        One DailySpending per distinct day, sorted by date ascending.
    """
    totals: dict[datetime, float] = {}
    for expense in expenses:
        day = start_of_day(expense.date)
        totals[day] = totals.get(day, 0.0) + expense.amount

    return [DailySpending(date=day, total=Money(total)) for day, total in sorted(totals.items())]


def average_daily(expenses: list[Expense], currency: Currency) -> Money:
    """Calculate average spending per day that has expenses.

    Returns:
        Total spent divided by distinct expense days, or 0.0 with no expenses.
    """
    days = group_by_day(filter_by_currency(expenses, currency))
    if not days:
        return Money(0.0)
    return Money(total_spent(expenses, currency) / len(days))


def convert_sgd_to_idr(amount: Money, rate: float = DEFAULT_CONVERSION_RATE) -> Money:
    """Convert an SGD amount to IDR using a static rate."""
    return Money(amount * rate)


def compute_ledger_summary(
    expenses: list[Expense],
    base_amounts: list[BaseAmount],
    currency: Currency,
) -> LedgerSummary:
    """Recompute every aggregate for one currency from a snapshot.

    Args:
        expenses: Expense snapshot (any currencies).
        base_amounts: Base amount snapshot (any currencies).
        currency: Currency to summarize.

    Returns:
        LedgerSummary with totals, ratio, urgency and daily average.
    """
    base = total_base(base_amounts, currency)
    spent = total_spent(expenses, currency)
    remaining = Money(base - spent)
    ratio = calculate_ratio(remaining, base)
    days = group_by_day(filter_by_currency(expenses, currency))

    return LedgerSummary(
        currency=currency,
        total_base=base,
        total_spent=spent,
        remaining=remaining,
        ratio=ratio,
        urgency=urgency_level(ratio),
        average_daily=Money(spent / len(days)) if days else Money(0.0),
        expense_days=len(days),
    )


def calculate_histogram_bar_length(amount: Money, max_amount: Money, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
