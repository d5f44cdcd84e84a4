"""Tests for indospend.domain.ledger pure functions."""

from datetime import datetime, timedelta, timezone

from indospend.domain.ledger import (
    BaseAmount,
    DailySpending,
    Expense,
    average_daily,
    balance_ratio,
    base_amount_from_record,
    calculate_histogram_bar_length,
    calculate_ratio,
    compute_ledger_summary,
    convert_sgd_to_idr,
    expense_from_record,
    group_by_day,
    remaining_balance,
    total_base,
    total_spent,
    urgency_level,
)
from indospend.domain.models import Currency, Description, Money

SGD = Currency.SGD
IDR = Currency.IDR


def make_expense(amount: float, currency: Currency = SGD, date: datetime | None = None, expense_id: int = 1) -> Expense:
    return Expense(
        id=expense_id,
        amount=Money(amount),
        description=Description("test"),
        date=date or datetime(2025, 1, 15, 12, 0),
        currency=currency,
    )


def make_base(amount: float, currency: Currency = SGD, label: str = "") -> BaseAmount:
    return BaseAmount(id=1, currency=currency, amount=Money(amount), label=label)


class TestTotals:
    """Tests for total_spent, total_base and remaining_balance."""

    def test_total_spent_filters_currency(self) -> None:
        """Should only sum expenses in the requested currency."""
        expenses = [make_expense(30), make_expense(20), make_expense(50000, IDR)]

        assert total_spent(expenses, SGD) == 50
        assert total_spent(expenses, IDR) == 50000

    def test_total_base_sums_entries(self) -> None:
        """Should add up every base amount entry for the currency."""
        bases = [make_base(100), make_base(50), make_base(1_000_000, IDR)]

        assert total_base(bases, SGD) == 150
        assert total_base(bases, IDR) == 1_000_000

    def test_remaining_balance(self) -> None:
        """Should subtract spending from the budget."""
        expenses = [make_expense(30), make_expense(20)]
        bases = [make_base(100), make_base(50)]

        assert remaining_balance(expenses, bases, SGD) == 100

    def test_remaining_balance_can_go_negative(self) -> None:
        """Should not clamp overspending."""
        assert remaining_balance([make_expense(80)], [make_base(50)], SGD) == -30

    def test_empty_snapshot(self) -> None:
        """Should be zero with no data."""
        assert total_spent([], SGD) == 0
        assert total_base([], SGD) == 0
        assert remaining_balance([], [], SGD) == 0


class TestRatio:
    """Tests for calculate_ratio, balance_ratio and urgency_level."""

    def test_ratio_of_remaining_to_budget(self) -> None:
        """Should divide remaining by budget."""
        assert balance_ratio([make_expense(25)], [make_base(100)], SGD) == 0.75

    def test_zero_budget_is_fully_funded(self) -> None:
        """Should be exactly 1.0 without a budget, whatever was spent."""
        assert balance_ratio([make_expense(999)], [], SGD) == 1.0
        assert calculate_ratio(Money(-10), Money(0)) == 1.0

    def test_overspent_clamps_to_zero(self) -> None:
        """Should clamp negative ratios to 0."""
        assert balance_ratio([make_expense(150)], [make_base(100)], SGD) == 0.0

    def test_clamps_above_one(self) -> None:
        """Should clamp ratios above 1."""
        assert calculate_ratio(Money(200), Money(100)) == 1.0

    def test_urgency_bands(self) -> None:
        """Should use exclusive lower bounds at 0.5 and 0.2."""
        assert urgency_level(1.0) == "healthy"
        assert urgency_level(0.51) == "healthy"
        assert urgency_level(0.5) == "warning"
        assert urgency_level(0.21) == "warning"
        assert urgency_level(0.2) == "critical"
        assert urgency_level(0.0) == "critical"


class TestGroupByDay:
    """Tests for group_by_day."""

    def test_two_days_sorted_ascending(self) -> None:
        """Should produce one entry per day in date order."""
        expenses = [
            make_expense(5, date=datetime(2025, 1, 16, 9, 0)),
            make_expense(10, date=datetime(2025, 1, 15, 8, 0)),
            make_expense(15, date=datetime(2025, 1, 16, 22, 30)),
        ]

        assert group_by_day(expenses) == [
            DailySpending(date=datetime(2025, 1, 15), total=Money(10)),
            DailySpending(date=datetime(2025, 1, 16), total=Money(20)),
        ]

    def test_midnight_boundary(self) -> None:
        """Should split expenses either side of midnight."""
        expenses = [
            make_expense(1, date=datetime(2025, 1, 15, 23, 59, 59)),
            make_expense(2, date=datetime(2025, 1, 16, 0, 0, 0)),
        ]

        assert [d.total for d in group_by_day(expenses)] == [1, 2]

    def test_aware_timestamps_group_by_local_day(self) -> None:
        """Should bucket timezone-aware timestamps by their local calendar day."""
        moment = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
        days = group_by_day([make_expense(7, date=moment)])

        local = moment.astimezone()
        assert days[0].date.date() == local.date()
        assert (days[0].date.hour, days[0].date.minute) == (0, 0)

    def test_empty(self) -> None:
        """Should return no days for no expenses."""
        assert group_by_day([]) == []


class TestAverageDaily:
    """Tests for average_daily."""

    def test_average_over_expense_days(self) -> None:
        """Should divide by distinct days that have expenses."""
        start = datetime(2025, 1, 1, 10, 0)
        expenses = [
            make_expense(10, date=start),
            make_expense(20, date=start + timedelta(hours=2)),
            make_expense(30, date=start + timedelta(days=5)),
        ]

        assert average_daily(expenses, SGD) == 30

    def test_no_expenses_is_zero(self) -> None:
        """Should avoid dividing by zero."""
        assert average_daily([], SGD) == 0.0

    def test_ignores_other_currency(self) -> None:
        """Should only count days with expenses in the currency."""
        expenses = [
            make_expense(10, date=datetime(2025, 1, 1)),
            make_expense(5000, IDR, date=datetime(2025, 1, 2)),
        ]

        assert average_daily(expenses, SGD) == 10


class TestComputeLedgerSummary:
    """Tests for compute_ledger_summary."""

    def test_summary(self) -> None:
        """Should compute every aggregate at once."""
        expenses = [
            make_expense(30, date=datetime(2025, 1, 1)),
            make_expense(20, date=datetime(2025, 1, 2)),
            make_expense(70000, IDR),
        ]
        bases = [make_base(100), make_base(50)]

        summary = compute_ledger_summary(expenses, bases, SGD)

        assert summary.currency == SGD
        assert summary.total_base == 150
        assert summary.total_spent == 50
        assert summary.remaining == 100
        assert summary.ratio == 100 / 150
        assert summary.urgency == "healthy"
        assert summary.average_daily == 25
        assert summary.expense_days == 2

    def test_idempotent(self) -> None:
        """Should give identical results on the same snapshot."""
        expenses = [make_expense(12.5), make_expense(7.25, date=datetime(2025, 2, 1))]
        bases = [make_base(40)]

        first = compute_ledger_summary(expenses, bases, SGD)
        second = compute_ledger_summary(expenses, bases, SGD)

        assert first == second
        assert group_by_day(expenses) == group_by_day(expenses)


class TestConversionAndRecords:
    """Tests for conversion, histogram scaling and record conversion."""

    def test_default_conversion_rate(self) -> None:
        """Should convert at 10500 IDR per SGD by default."""
        assert convert_sgd_to_idr(Money(2)) == 21000

    def test_custom_conversion_rate(self) -> None:
        """Should use the given rate."""
        assert convert_sgd_to_idr(Money(2), 11000) == 22000

    def test_histogram_bar_length(self) -> None:
        """Should scale bars to the largest amount."""
        assert calculate_histogram_bar_length(Money(5), Money(10), 40) == 20
        assert calculate_histogram_bar_length(Money(5), Money(0), 40) == 0

    def test_expense_from_record(self) -> None:
        """Should parse store rows into Expenses."""
        expense = expense_from_record(
            {"id": 3, "amount": 4.5, "description": None, "date": "2025-01-15T08:30:00", "currency": "IDR"}
        )

        assert expense == Expense(
            id=3,
            amount=Money(4.5),
            description=Description(""),
            date=datetime(2025, 1, 15, 8, 30),
            currency=IDR,
        )

    def test_base_amount_from_record(self) -> None:
        """Should parse store rows into BaseAmounts."""
        entry = base_amount_from_record({"id": 2, "currency": "SGD", "amount": 100, "label": "Salary"})

        assert entry == BaseAmount(id=2, currency=SGD, amount=Money(100.0), label="Salary")
