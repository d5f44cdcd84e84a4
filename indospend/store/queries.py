"""Database query functions."""

import sqlite3
from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import Any

from indospend.domain.models import Currency, Money
from indospend.store.schema import get_db_path

EXPENSE_COLUMNS = "id, amount, description, date, currency"
BASE_AMOUNT_COLUMNS = "id, currency, amount, label"


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _format_date(date: datetime) -> str:
    return date.isoformat(timespec="seconds")


def insert_expense(
    amount: Money,
    description: str,
    currency: Currency,
    date: datetime | None = None,
    db_path: Path | None = None,
) -> int:
    """Insert an expense.

    Args:
        amount: Expense amount in major units.
        description: Expense description (may be empty).
        currency: Currency the expense was paid in.
        date: When the expense happened. If None, uses now.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new expense.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    if date is None:
        date = datetime.now()

    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO expenses (amount, description, date, currency) VALUES (?, ?, ?, ?)",
                (amount, description, _format_date(date), currency.value),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_expense(expense_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a single expense by ID.

    Returns:
        Expense dictionary, or None if no such expense exists.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {EXPENSE_COLUMNS} FROM expenses WHERE id = ?", (expense_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def get_all_expenses(
    db_path: Path | None = None,
    currency: Currency | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """Get all expenses, newest first.

    Args:
        db_path: Path to the database file. If None, uses default location.
        currency: Only return expenses in this currency. If None, returns all.
        limit: Maximum number of expenses to return. If None, returns all.

    Returns:
        List of expense dictionaries ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        query = f"SELECT {EXPENSE_COLUMNS} FROM expenses"
        params: list[Any] = []

        if currency is not None:
            query += " WHERE currency = ?"
            params.append(currency.value)

        query += " ORDER BY date DESC, id DESC"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        return [dict(row) for row in cursor.fetchall()]


def update_expense(
    expense_id: int,
    amount: Money,
    description: str,
    db_path: Path | None = None,
) -> bool:
    """Update an expense's amount and description.

    Args:
        expense_id: Expense ID.
        amount: New amount.
        description: New description.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if the expense existed and was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "UPDATE expenses SET amount = ?, description = ? WHERE id = ?",
                (amount, description, expense_id),
            )
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_expense(expense_id: int, db_path: Path | None = None) -> bool:
    """Delete an expense.

    Returns:
        True if the expense existed and was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def insert_base_amount(
    amount: Money,
    currency: Currency,
    label: str = "",
    db_path: Path | None = None,
) -> int:
    """Add a base amount entry to a currency's budget.

    Args:
        amount: Amount in major units.
        currency: Currency of the budget.
        label: Optional label (e.g. "Salary").
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new entry.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO base_amounts (currency, amount, label) VALUES (?, ?, ?)",
                (currency.value, amount, label),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_base_amount(entry_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a single base amount entry by ID.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {BASE_AMOUNT_COLUMNS} FROM base_amounts WHERE id = ?", (entry_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def get_all_base_amounts(db_path: Path | None = None, currency: Currency | None = None) -> list[dict[str, Any]]:
    """Get all base amount entries.

    Args:
        db_path: Path to the database file. If None, uses default location.
        currency: Only return entries in this currency. If None, returns all.

    Returns:
        List of base amount dictionaries in insertion order.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        query = f"SELECT {BASE_AMOUNT_COLUMNS} FROM base_amounts"
        params: list[Any] = []

        if currency is not None:
            query += " WHERE currency = ?"
            params.append(currency.value)

        query += " ORDER BY id"

        cursor.execute(query, params)
        return [dict(row) for row in cursor.fetchall()]


def update_base_amount(
    entry_id: int,
    amount: Money,
    label: str,
    db_path: Path | None = None,
) -> bool:
    """Update a base amount entry's amount and label.

    Returns:
        True if the entry existed and was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "UPDATE base_amounts SET amount = ?, label = ? WHERE id = ?",
                (amount, label, entry_id),
            )
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_base_amount(entry_id: int, db_path: Path | None = None) -> bool:
    """Delete a base amount entry.

    Returns:
        True if the entry existed and was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM base_amounts WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise
