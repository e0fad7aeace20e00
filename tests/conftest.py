"""
Pytest configuration and shared fixtures.
"""

import os

os.environ.setdefault("LOG_TO_FILE", "false")

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from alert_agent.config import Settings
from alert_agent.models import JobRecord
from alert_agent.scanners import JobScanner, ScanMode

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def make_job(
    title: str = "Data Engineer",
    company: str = "Acme",
    hours_ago: float = 5,
    score: int = 80,
    **overrides: Any,
) -> JobRecord:
    """Build a record published *hours_ago* before NOW."""
    fields: Dict[str, Any] = dict(
        title=title,
        company=company,
        primary_role=title,
        location="Stockholm",
        published_at_utc=iso(NOW - timedelta(hours=hours_ago)),
        age_hours=float(hours_ago),
        match_score=score,
        skills=("SQL", "Python"),
        source="LinkedIn",
        apply_url="",
        alert_message_en="New role.",
        alert_message_sv="Ny tjänst.",
    )
    fields.update(overrides)
    return JobRecord(**fields)


class StubScanner(JobScanner):
    """Returns queued batches (or raises queued errors) in order."""

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[tuple] = []

    def invoke(self, mode: ScanMode, text: Optional[str] = None) -> List[JobRecord]:
        self.calls.append((mode, text))
        outcome = self.outcomes.pop(0) if self.outcomes else []
        if isinstance(outcome, BaseException):
            raise outcome
        return list(outcome)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def job_factory():
    return make_job


@pytest.fixture
def raw_job() -> Dict[str, Any]:
    """One record in the LLM's wire format."""
    return {
        "job_title": "BI Developer",
        "company": "Kvarnby Logistik",
        "primary_role": "BI Developer",
        "location": "Malmö",
        "employment_type": "Permanent",
        "seniority": "Senior",
        "publish_date_utc": "2026-10-18T08:30:00Z",
        "job_age_hours": 27.5,
        "match_score": 88,
        "key_skills": ["Power BI", "SQL"],
        "source": "Platsbanken",
        "apply_url": "",
        "alert_message_en": "Posted 27 hours ago.",
        "alert_message_sv": "Publicerad för 27 timmar sedan.",
    }
