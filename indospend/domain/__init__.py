"""Domain models and types for indospend.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Parsing and ledger arithmetic separated from storage and the CLI
"""

from indospend.domain.models import Currency, Description, Money

__all__ = ["Currency", "Description", "Money"]
