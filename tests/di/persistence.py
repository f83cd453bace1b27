"""Mock persistence providers for testing."""

from dishka import Scope, provide

from homework.config import RankingSettings
from homework.domain.repository import QuestionRepository, VoteRepository
from homework.persistence.repository.inmemory import (
    InMemoryQuestionRepository,
    InMemoryVoteRepository,
)
from homework.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so data survives across HTTP requests within one test.
    Every test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_question_repository(self, ranking: RankingSettings) -> QuestionRepository:
        """Provide in-memory question repository."""
        return InMemoryQuestionRepository(ranking)

    @provide(scope=Scope.APP)
    def get_vote_repository(self) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository()
