"""Domain services."""

from .base import Service
from .notifier import (
    CallbackVoteNotifier,
    LogfireVoteNotifier,
    RecordingVoteNotifier,
    VoteListener,
    VoteNotifier,
)
from .vote_service import VoteService

__all__ = [
    "CallbackVoteNotifier",
    "LogfireVoteNotifier",
    "RecordingVoteNotifier",
    "Service",
    "VoteListener",
    "VoteNotifier",
    "VoteService",
]
