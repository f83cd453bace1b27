"""Vote use cases."""

from .upvote import UpvoteRequest, UpvoteUseCase, VoteTallyResponse
from .remove_vote import RemoveVoteRequest, RemoveVoteUseCase
from .reconcile_votes import (
    ReconcileVotesRequest,
    ReconcileVotesResponse,
    ReconcileVotesUseCase,
)

__all__ = [
    "UpvoteRequest",
    "UpvoteUseCase",
    "VoteTallyResponse",
    "RemoveVoteRequest",
    "RemoveVoteUseCase",
    "ReconcileVotesRequest",
    "ReconcileVotesResponse",
    "ReconcileVotesUseCase",
]
