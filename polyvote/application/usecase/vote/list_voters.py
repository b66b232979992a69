"""List voters use case."""

from typing import Optional

from pydantic import BaseModel

from polyvote.application.usecase.base import BaseUseCase
from polyvote.domain.service import VoteService
from polyvote.domain.value import Direction

from .common import EntityPayload


class ListVotersRequest(BaseModel):
    """List voters request.

    ``direction`` restricts the list to up- or down-voters.
    """

    votable: EntityPayload
    direction: Optional[int | str] = None


class ListVotersResponse(BaseModel):
    """List voters response, oldest vote first."""

    voters: list[EntityPayload]


class ListVotersUseCase(BaseUseCase):
    """Use case for listing who voted on a votable."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize list voters use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: ListVotersRequest) -> ListVotersResponse:
        """Execute list voters flow.

        Raises:
            InvalidDirectionError: If a direction filter is given but invalid
        """
        direction = (
            Direction.parse(request.direction)
            if request.direction is not None
            else None
        )
        voters = await self.vote_service.voters_of(
            request.votable.to_ref(), direction=direction
        )
        return ListVotersResponse(
            voters=[EntityPayload.from_ref(ref) for ref in voters]
        )
