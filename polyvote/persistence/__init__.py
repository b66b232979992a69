"""Persistence layer: PostgreSQL and in-memory vote ledger stores."""
