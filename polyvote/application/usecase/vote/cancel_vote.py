"""Cancel vote use case."""

from pydantic import BaseModel

from polyvote.application.usecase.base import BaseUseCase
from polyvote.domain.service import VoteService

from .common import EntityPayload


class CancelVoteRequest(BaseModel):
    """Cancel vote request."""

    voter: EntityPayload
    votable: EntityPayload


class CancelVoteResponse(BaseModel):
    """Cancel vote response."""

    success: bool
    message: str


class CancelVoteUseCase(BaseUseCase):
    """Use case for cancelling a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cancel vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CancelVoteRequest) -> CancelVoteResponse:
        """Execute cancel vote flow.

        Args:
            request: Cancel vote request

        Returns:
            Cancel vote response
        """
        removed = await self.vote_service.cancel_vote(
            request.voter.to_ref(), request.votable.to_ref()
        )

        if removed:
            return CancelVoteResponse(
                success=True,
                message="Vote cancelled successfully",
            )
        else:
            return CancelVoteResponse(
                success=False,
                message="No vote found to cancel",
            )
