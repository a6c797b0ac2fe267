"""Fee-and-payment ledger service for schools."""
__version__ = "1.0.0"
