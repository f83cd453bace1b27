"""Domain layer DI providers."""

from dishka import Scope, provide

from homework.config import AuthSettings, PaginationSettings
from homework.domain.repository import QuestionRepository, VoteRepository
from homework.domain.service import (
    JWTService,
    QuestionService,
    RankingService,
    VoteService,
)
from homework.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_question_service(
        self, question_repository: QuestionRepository
    ) -> QuestionService:
        """Provide question domain service."""
        return QuestionService(question_repository=question_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        question_service: QuestionService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            question_service=question_service,
        )

    @provide
    def get_ranking_service(
        self,
        question_repository: QuestionRepository,
        pagination: PaginationSettings,
    ) -> RankingService:
        """Provide ranking query service."""
        return RankingService(
            question_repository=question_repository, pagination=pagination
        )
