"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from indospend.store.queries import (
    delete_base_amount,
    delete_expense,
    get_all_base_amounts,
    get_all_expenses,
    get_base_amount,
    get_expense,
    insert_base_amount,
    insert_expense,
    update_base_amount,
    update_expense,
)
from indospend.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Expenses
    "delete_expense",
    "get_all_expenses",
    "get_expense",
    "insert_expense",
    "update_expense",
    # Base amounts
    "delete_base_amount",
    "get_all_base_amounts",
    "get_base_amount",
    "insert_base_amount",
    "update_base_amount",
]
