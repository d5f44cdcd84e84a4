"""Domain type definitions for indospend.

These types provide semantic clarity and help with type checking:
- Money: Amount in major units of the expense currency (e.g. 12.50 SGD)
- Description: Free-text expense description
- Currency: The two tracked currencies
"""

from enum import Enum
from typing import NewType

# SGD has cents, IDR has none, so amounts stay in major units
Money = NewType("Money", float)

# Expense description text (may be empty)
Description = NewType("Description", str)


class Currency(str, Enum):
    """Currencies an expense or base amount can be recorded in."""

    SGD = "SGD"
    IDR = "IDR"


def parse_currency(value: str) -> Currency:
    """Parse a currency code, case-insensitively.

    Args:
        value: Currency code such as "sgd" or "IDR".

    Returns:
        Matching Currency.

    Raises:
        ValueError: If the code is not a tracked currency.
    """
    try:
        return Currency(value.strip().upper())
    except ValueError:
        choices = ", ".join(c.value for c in Currency)
        raise ValueError(f"Unknown currency '{value}' (expected one of: {choices})") from None
