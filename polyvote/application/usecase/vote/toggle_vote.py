"""Toggle vote use case."""

from typing import Optional

from pydantic import BaseModel

from polyvote.application.usecase.base import BaseUseCase
from polyvote.domain.service import VoteService

from .common import DirectedVoteRequest, VotePayload


class ToggleVoteRequest(DirectedVoteRequest):
    """Toggle vote request."""

    pass


class ToggleVoteResponse(BaseModel):
    """Toggle vote response.

    ``vote`` is None when the toggle removed the vote.
    """

    vote: Optional[VotePayload] = None
    cancelled: bool


class ToggleVoteUseCase(BaseUseCase):
    """Use case for toggling a vote on or off."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize toggle vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: ToggleVoteRequest) -> ToggleVoteResponse:
        """Execute toggle vote flow.

        Args:
            request: Toggle vote request

        Returns:
            Toggle vote response
        """
        vote = await self.vote_service.toggle_vote(
            request.voter.to_ref(), request.votable.to_ref(), request.direction
        )
        if vote is None:
            return ToggleVoteResponse(vote=None, cancelled=True)
        return ToggleVoteResponse(vote=VotePayload.from_vote(vote), cancelled=False)
