"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .question_service import QuestionService
from .ranking_service import RankedPage, RankingService
from .vote_service import VoteService

__all__ = [
    "JWTService",
    "QuestionService",
    "RankedPage",
    "RankingService",
    "Service",
    "VoteService",
]
