"""Display-only derivations: score and age tiers, dates, feed stats."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from alert_agent.models import JobRecord

HIGH_SCORE = 90
MEDIUM_SCORE = 75
NEW_HOURS = 24
RECENT_HOURS = 48

SCORE_COLORS: dict[str, str] = {
    "high": "#34d399",
    "medium": "#60a5fa",
    "low": "#facc15",
}


@dataclass(frozen=True)
class AgeTier:
    name: str
    hours: float
    days: int = 0

    @property
    def label(self) -> str:
        if self.name == "new":
            return f"New ({self.hours:g}h)"
        if self.name == "recent":
            return f"Recent ({self.hours:g}h)"
        return f"{self.days}d old"


def score_tier(score: float) -> str:
    if score >= HIGH_SCORE:
        return "high"
    if score >= MEDIUM_SCORE:
        return "medium"
    return "low"


def age_tier(hours: float) -> AgeTier:
    if hours <= NEW_HOURS:
        return AgeTier("new", hours)
    if hours <= RECENT_HOURS:
        return AgeTier("recent", hours)
    return AgeTier("aged", hours, days=int(hours // 24))


def format_published(job: JobRecord) -> str:
    published = job.published_at
    if published is None:
        return job.published_at_utc
    return published.strftime("%a %d %b %Y %H:%M UTC")


def fresh_count(jobs: Iterable[JobRecord]) -> int:
    return sum(1 for j in jobs if j.age_hours <= NEW_HOURS)
