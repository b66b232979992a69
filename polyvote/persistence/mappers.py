"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from polyvote.domain.model import Vote
from polyvote.domain.value import Direction, EntityRef, VoteId


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        voter=EntityRef(type=row["voter_type"], id=row["voter_id"]),
        votable=EntityRef(type=row["votable_type"], id=row["votable_id"]),
        direction=Direction(row["direction"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    The polymorphic references are flattened into their type/id columns.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": vote.id,
        "voter_type": vote.voter.type,
        "voter_id": vote.voter.id,
        "votable_type": vote.votable.type,
        "votable_id": vote.votable.id,
        "direction": int(vote.direction),
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }
