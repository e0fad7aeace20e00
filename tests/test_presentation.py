"""
Tests for score and age tiers.
"""

import pytest

from conftest import make_job
from alert_agent.presentation import age_tier, format_published, fresh_count, score_tier


class TestScoreTier:
    @pytest.mark.parametrize("score,tier", [
        (100, "high"), (90, "high"), (89, "medium"), (75, "medium"),
        (74, "low"), (0, "low"), (-20, "low"), (1000, "high"),
    ])
    def test_thresholds(self, score, tier):
        assert score_tier(score) == tier


class TestAgeTier:
    def test_boundaries(self):
        assert age_tier(24).name == "new"
        assert age_tier(25).name == "recent"
        aged = age_tier(49)
        assert aged.name == "aged"
        assert aged.days == 2

    def test_48_hours_is_recent(self):
        assert age_tier(48).name == "recent"

    def test_labels(self):
        assert age_tier(5).label == "New (5h)"
        assert age_tier(30.5).label == "Recent (30.5h)"
        assert age_tier(150).label == "6d old"

    def test_negative_and_huge_values(self):
        assert age_tier(-3).name == "new"
        assert age_tier(10_000).days == 416


class TestFeedHelpers:
    def test_fresh_count(self):
        jobs = [make_job(hours_ago=1), make_job(hours_ago=24), make_job(hours_ago=24.5)]
        assert fresh_count(jobs) == 2

    def test_format_published(self):
        job = make_job(published_at_utc="2026-10-14T09:30:00Z")
        assert format_published(job) == "Wed 14 Oct 2026 09:30 UTC"

    def test_format_published_falls_back_to_raw(self):
        job = make_job(published_at_utc="sometime")
        assert format_published(job) == "sometime"
