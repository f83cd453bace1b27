"""Per-user request rate limiting."""

import math
import time

import logfire
from limits import RateLimitItem, parse
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter

from homework.config import RateLimitSettings

QUESTIONS = "questions"
VOTES = "votes"


class RateLimitExceededError(Exception):
    """Raised when a user has used up a bucket's requests for the window."""

    def __init__(self, bucket: str, retry_after: int):
        self.bucket = bucket
        self.retry_after = retry_after
        super().__init__(f"Too many {bucket} requests, retry in {retry_after}s")


class RateLimiter:
    """Fixed-window limits per (bucket, user).

    Votes and retracts share the ``votes`` bucket; submissions use
    ``questions``.
    """

    def __init__(self, settings: RateLimitSettings) -> None:
        self.enabled = settings.enabled
        self._limits: dict[str, RateLimitItem] = {
            QUESTIONS: parse(settings.questions),
            VOTES: parse(settings.votes),
        }
        self._strategy = FixedWindowRateLimiter(
            storage_from_string(settings.storage_uri)
        )

    def check(self, bucket: str, user_id: str) -> None:
        """Count one request against the user's bucket.

        Raises:
            RateLimitExceededError: If the bucket is exhausted for this window
        """
        if not self.enabled:
            return

        limit = self._limits[bucket]
        if self._strategy.hit(limit, bucket, user_id):
            return

        reset_time, _ = self._strategy.get_window_stats(limit, bucket, user_id)
        retry_after = max(1, math.ceil(reset_time - time.time()))
        logfire.warn(
            "Rate limit exceeded",
            bucket=bucket,
            user_id=user_id,
            limit=str(limit),
            retry_after=retry_after,
        )
        raise RateLimitExceededError(bucket, retry_after)
