"""Application layer DI providers."""

from dishka import Scope, provide

from homework.application.usecase.question import (
    CreateQuestionUseCase,
    GetQuestionUseCase,
    ListQuestionsUseCase,
    TrendingQuestionsUseCase,
)
from homework.application.usecase.vote import (
    ReconcileVotesUseCase,
    RemoveVoteUseCase,
    UpvoteUseCase,
)
from homework.domain.service import (
    QuestionService,
    RankingService,
    VoteService,
)
from homework.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Question use cases
    @provide(scope=Scope.REQUEST)
    def get_create_question_use_case(
        self, question_service: QuestionService
    ) -> CreateQuestionUseCase:
        """Provide create question use case."""
        return CreateQuestionUseCase(question_service=question_service)

    @provide(scope=Scope.REQUEST)
    def get_get_question_use_case(
        self, question_service: QuestionService, vote_service: VoteService
    ) -> GetQuestionUseCase:
        """Provide get question use case."""
        return GetQuestionUseCase(
            question_service=question_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_questions_use_case(
        self, ranking_service: RankingService, vote_service: VoteService
    ) -> ListQuestionsUseCase:
        """Provide list questions use case."""
        return ListQuestionsUseCase(
            ranking_service=ranking_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_trending_questions_use_case(
        self, ranking_service: RankingService, vote_service: VoteService
    ) -> TrendingQuestionsUseCase:
        """Provide trending questions use case."""
        return TrendingQuestionsUseCase(
            ranking_service=ranking_service, vote_service=vote_service
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_upvote_use_case(self, vote_service: VoteService) -> UpvoteUseCase:
        """Provide upvote use case."""
        return UpvoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(self, vote_service: VoteService) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_reconcile_votes_use_case(
        self, ranking_service: RankingService, vote_service: VoteService
    ) -> ReconcileVotesUseCase:
        """Provide reconcile votes use case."""
        return ReconcileVotesUseCase(
            ranking_service=ranking_service, vote_service=vote_service
        )
