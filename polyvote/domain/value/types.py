"""Domain value objects for the vote ledger.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum, IntEnum
from typing import Any
from uuid import UUID

from pydantic import field_validator

from polyvote.domain.error import InvalidDirectionError
from polyvote.domain.value.common import ValueObject


class Direction(IntEnum):
    """Direction of a vote.

    The integer value is the vote's contribution to a votable's total.
    """

    UP = 1
    DOWN = -1

    @classmethod
    def parse(cls, value: Any) -> "Direction":
        """Parse a direction from an enum, a 1/-1 int, "up"/"down" or "1"/"+1"/"-1".

        Raises:
            InvalidDirectionError: For any other value
        """
        if isinstance(value, Direction):
            return value
        # bool is an int subclass; True must not be read as an upvote
        if isinstance(value, int) and not isinstance(value, bool):
            if value == 1:
                return cls.UP
            if value == -1:
                return cls.DOWN
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in ("up", "1", "+1"):
                return cls.UP
            if normalized in ("down", "-1"):
                return cls.DOWN
        raise InvalidDirectionError(value)

    @property
    def opposite(self) -> "Direction":
        """The other direction."""
        return Direction.DOWN if self is Direction.UP else Direction.UP


class VoteChange(str, Enum):
    """Outcome of an upsert against the vote ledger."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class EntityRef(ValueObject):
    """Polymorphic reference to a voter or votable entity.

    The pair (type, id) is the only thing the ledger knows about an entity.
    Ids are opaque and stored as strings, so ``EntityRef.of("user", 1)`` and
    ``EntityRef.of("user", "1")`` refer to the same entity.
    """

    type: str
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept ints and UUIDs as ids."""
        if isinstance(v, bool):
            raise ValueError("Entity id must not be a boolean")
        if isinstance(v, (int, UUID)):
            return str(v)
        return v

    @field_validator("type", "id")
    @classmethod
    def validate_length(cls, v: str) -> str:
        """Validate type tag and id are not empty and fit the ledger columns."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Entity type and id must be 1-255 characters")
        return v

    @classmethod
    def of(cls, type: str, id: str | int | UUID) -> "EntityRef":
        """Build a reference positionally."""
        return cls(type=type, id=id)

    def __str__(self) -> str:
        return f"{self.type}:{self.id}"
