"""Strongly typed identifiers for ledger entities."""

from typing import NewType
from uuid import UUID

VoteId = NewType("VoteId", UUID)
