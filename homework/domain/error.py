"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class QuestionNotFoundError(NotFoundError):
    """Raised when a question does not exist."""

    def __init__(self, question_id: str):
        super().__init__("Question", question_id)


class VoteNotFoundError(NotFoundError):
    """Raised when retracting a vote that was never cast."""

    def __init__(self, user_id: str, question_id: str):
        self.user_id = user_id
        self.question_id = question_id
        super().__init__("Vote", f"user={user_id} question={question_id}")


class AlreadyVotedError(BusinessRuleViolationError):
    """Raised when a user casts a second vote on the same question."""

    def __init__(self, user_id: str, question_id: str):
        self.user_id = user_id
        self.question_id = question_id
        super().__init__("You have already voted on this question")


class DuplicateVoteError(DomainError):
    """Raised by the vote ledger when the (user, question) pair already exists."""

    pass


class TransientStorageError(DomainError):
    """Raised when the store is unreachable; the operation may be retried."""

    pass


class InvariantViolationError(DomainError):
    """Raised when counters and the vote ledger disagree in an impossible way."""

    pass
