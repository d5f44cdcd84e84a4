"""IndoSpend - expense tracking in SGD and IDR."""

__version__ = "0.1.0"
