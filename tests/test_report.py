"""
Tests for the Markdown digest and the notification rule.
"""

from datetime import datetime, timezone

from conftest import NOW, make_job
from alert_agent.report import build_digest, is_notifiable, write_digest


class TestIsNotifiable:
    def test_current_month_and_score(self):
        assert is_notifiable(make_job(score=60, hours_ago=5), NOW)

    def test_below_threshold(self):
        assert not is_notifiable(make_job(score=59, hours_ago=5), NOW)
        assert is_notifiable(make_job(score=59, hours_ago=5), NOW, min_score=50)

    def test_previous_month(self):
        job = make_job(score=95, published_at_utc="2026-09-30T23:00:00Z")
        assert not is_notifiable(job, NOW)

    def test_undated(self):
        assert not is_notifiable(make_job(score=95, published_at_utc="unknown"), NOW)


class TestBuildDigest:
    def test_empty_feed(self):
        digest = build_digest([], now=NOW)
        assert digest.startswith("# Job Alerts — 2026-10-19")
        assert "**0** matches" in digest
        assert "No matches found" in digest

    def test_sections_and_counts(self):
        jobs = [
            make_job("Data Engineer", "Acme", hours_ago=3, score=92, source="LinkedIn"),
            make_job("BI Developer", "Kommun", hours_ago=60, score=55, source="Platsbanken"),
        ]
        digest = build_digest(jobs, now=NOW)
        assert "**2** matches | **1** fresh (<24h) | **1** alert-worthy" in digest
        assert "### \U0001f514 Data Engineer @ Acme" in digest
        assert "### BI Developer @ Kommun" in digest
        assert "- **Score:** 92 (high)" in digest
        assert "New (3h)" in digest
        assert "2d old" in digest
        assert "https://www.linkedin.com/jobs/search/?keywords=Data%20Engineer%20Acme&location=Stockholm" in digest
        assert "[Platsbanken](https://platsbanken.arbetsformedlingen.se/" in digest
        assert "## Quick Reference" in digest

    def test_feed_order_preserved(self):
        jobs = [make_job("First", hours_ago=1), make_job("Second", hours_ago=2)]
        digest = build_digest(jobs, now=NOW)
        assert digest.index("First @") < digest.index("Second @")


class TestWriteDigest:
    def test_writes_dated_file(self, tmp_path):
        when = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)
        path = write_digest("# hello", now=when, directory=tmp_path / "reports")
        assert path.name == "alerts_2026-10-19.md"
        assert path.read_text(encoding="utf-8") == "# hello"
