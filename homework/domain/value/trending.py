"""Time-decayed trending score.

    score = upvotes / (age_hours + time_offset) ** decay_factor

The offset keeps the denominator at or above ``time_offset`` so brand new
questions never divide by zero, and the decay factor controls how quickly
older questions sink.
"""

from datetime import datetime

from homework.domain.value.types import as_utc, utcnow

DECAY_FACTOR = 1.5
TIME_OFFSET_HOURS = 2.0


def age_in_hours(created_at: datetime, now: datetime | None = None) -> float:
    """Hours elapsed between creation and ``now``.

    Timestamps in the future (clock skew) count as age 0.

    Args:
        created_at: Creation timestamp
        now: Evaluation instant, defaults to the current UTC time

    Returns:
        Non-negative age in hours
    """
    now = as_utc(now) if now is not None else utcnow()
    elapsed = (now - as_utc(created_at)).total_seconds() / 3600
    return max(elapsed, 0.0)


def trending_score(
    upvotes: int,
    age_hours: float,
    decay_factor: float = DECAY_FACTOR,
    time_offset: float = TIME_OFFSET_HOURS,
) -> float:
    """Compute the trending score for a vote count at a given age.

    Args:
        upvotes: Number of upvotes (>= 0)
        age_hours: Age of the question in hours (>= 0)
        decay_factor: Exponent applied to the shifted age
        time_offset: Hours added to the age before decaying

    Returns:
        Trending score (0.0 when there are no upvotes)
    """
    return upvotes / (age_hours + time_offset) ** decay_factor
