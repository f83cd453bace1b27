"""Unit tests for the trending score function."""

from datetime import datetime, timedelta, timezone

import pytest

from homework.domain.value import age_in_hours, trending_score


class TestTrendingScore:
    """Tests for trending_score."""

    def test_fresh_question_with_ten_votes(self):
        """10 upvotes at age 0 scores 10 / 2^1.5."""
        assert trending_score(10, 0) == pytest.approx(3.5355339, rel=1e-6)

    @pytest.mark.parametrize("age_hours", [0, 1.5, 24, 24 * 365])
    def test_no_upvotes_scores_zero(self, age_hours):
        """Questions without upvotes always score 0."""
        assert trending_score(0, age_hours) == 0.0

    def test_more_upvotes_score_higher_at_same_age(self):
        """Score increases with upvotes."""
        scores = [trending_score(upvotes, 5.0) for upvotes in range(0, 20)]
        assert scores == sorted(scores)
        assert len(set(scores)) == len(scores)

    def test_older_questions_score_lower_with_same_upvotes(self):
        """Score decays as the question ages."""
        scores = [trending_score(7, age) for age in (0, 1, 6, 24, 72, 720)]
        assert scores == sorted(scores, reverse=True)
        assert len(set(scores)) == len(scores)

    def test_custom_decay_parameters(self):
        """Decay factor and offset are configurable."""
        assert trending_score(9, 1.0, decay_factor=2.0, time_offset=2.0) == pytest.approx(1.0)
        assert trending_score(4, 0.0, decay_factor=1.0, time_offset=4.0) == pytest.approx(1.0)


class TestAgeInHours:
    """Tests for age_in_hours."""

    def test_age_is_measured_in_hours(self):
        """Elapsed time is converted to fractional hours."""
        created = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        now = created + timedelta(hours=3, minutes=30)

        assert age_in_hours(created, now) == pytest.approx(3.5)

    def test_future_timestamps_clamp_to_zero(self):
        """A creation time ahead of now (clock skew) counts as age 0."""
        now = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        created = now + timedelta(minutes=5)

        assert age_in_hours(created, now) == 0.0

    def test_mixed_timezones_compare_as_instants(self):
        """Offsets are normalized before subtracting."""
        created = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        now = datetime(2025, 1, 1, 15, 0, tzinfo=timezone(timedelta(hours=2)))

        assert age_in_hours(created, now) == pytest.approx(1.0)
