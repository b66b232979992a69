"""PostgreSQL repository implementations."""

from polyvote.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresVoteRepository",
]
