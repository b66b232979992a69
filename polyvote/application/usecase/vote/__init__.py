"""Vote use cases."""

from .cancel_vote import CancelVoteRequest, CancelVoteResponse, CancelVoteUseCase
from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .common import EntityPayload, VotePayload
from .get_totals import (
    GetVoteTotalsRequest,
    GetVoteTotalsResponse,
    GetVoteTotalsUseCase,
    VotableTotals,
)
from .list_voters import ListVotersRequest, ListVotersResponse, ListVotersUseCase
from .toggle_vote import ToggleVoteRequest, ToggleVoteResponse, ToggleVoteUseCase

__all__ = [
    "EntityPayload",
    "VotePayload",
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "CancelVoteRequest",
    "CancelVoteResponse",
    "CancelVoteUseCase",
    "ToggleVoteRequest",
    "ToggleVoteResponse",
    "ToggleVoteUseCase",
    "GetVoteTotalsRequest",
    "GetVoteTotalsResponse",
    "GetVoteTotalsUseCase",
    "VotableTotals",
    "ListVotersRequest",
    "ListVotersResponse",
    "ListVotersUseCase",
]
