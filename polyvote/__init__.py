"""polyvote: a polymorphic up/down vote ledger."""

__version__ = "0.1.0"
