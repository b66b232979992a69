"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidDirectionError(ValidationError):
    """Raised when a vote direction is not one of up (+1) or down (-1)."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid vote direction: {value!r} (expected 1 or -1)")


class StoreError(DomainError):
    """Base error for vote ledger persistence failures."""

    pass


class StoreUnavailableError(StoreError):
    """Raised when the vote ledger store cannot be reached or fails."""

    pass


class TransactionConflictError(StoreError):
    """Raised when a write loses a serialization, deadlock or lock race."""

    pass
