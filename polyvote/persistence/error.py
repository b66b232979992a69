"""Translation of database driver errors into ledger store errors."""

from typing import Optional

from sqlalchemy.exc import DBAPIError

from polyvote.domain.error import (
    StoreError,
    StoreUnavailableError,
    TransactionConflictError,
)

# serialization_failure, deadlock_detected, lock_not_available
CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "55P03"})


def sqlstate_of(error: DBAPIError) -> Optional[str]:
    """Extract the SQLSTATE code from a wrapped driver error, if any."""
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def translate_store_error(error: DBAPIError) -> StoreError:
    """Map a SQLAlchemy DBAPI error onto the ledger's error taxonomy.

    Callers raise the result ``from`` the original so the driver error stays
    attached as ``__cause__``.
    """
    if sqlstate_of(error) in CONFLICT_SQLSTATES:
        return TransactionConflictError(f"Vote write conflicted: {error.orig}")
    return StoreUnavailableError(f"Vote store failure: {error.orig}")
