"""Build a Markdown digest of the alert feed."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable
from urllib.parse import urlparse

from alert_agent.config import REPORTS_DIR
from alert_agent.links import DEFAULT_REGION, resolve_apply_url
from alert_agent.log import get_logger
from alert_agent.models import JobRecord
from alert_agent.presentation import age_tier, format_published, fresh_count, score_tier

log = get_logger(__name__)

DEFAULT_NOTIFY_MIN_SCORE = 60


def is_notifiable(job: JobRecord, now: datetime, min_score: int = DEFAULT_NOTIFY_MIN_SCORE) -> bool:
    """Published in the current UTC calendar month and scored high enough."""
    published = job.published_at
    if published is None or job.match_score < min_score:
        return False
    now_utc = now.astimezone(timezone.utc)
    return (published.year, published.month) == (now_utc.year, now_utc.month)


def _short_url_label(url: str) -> str:
    host = (urlparse(url).hostname or "").replace("www.", "")
    parts = host.split(".")
    if parts and parts[0] in ("se", "platsbanken"):
        return {"se": "Indeed", "platsbanken": "Platsbanken"}[parts[0]]
    return parts[0].capitalize() if parts and parts[0] else "Link"


def _clip(text: str, limit: int) -> str:
    return text[:limit] + ("…" if len(text) > limit else "")


def build_digest(
    jobs: Iterable[JobRecord],
    *,
    now: datetime | None = None,
    notify_min_score: int = DEFAULT_NOTIFY_MIN_SCORE,
    region: str = DEFAULT_REGION,
) -> str:
    jobs = list(jobs)
    now = now or datetime.now(timezone.utc)
    date = now.astimezone(timezone.utc).strftime("%Y-%m-%d")
    notify = [j for j in jobs if is_notifiable(j, now, notify_min_score)]

    lines: list[str] = [f"# Job Alerts — {date}", ""]
    lines.append(
        f"**{len(jobs)}** matches | **{fresh_count(jobs)}** fresh (<24h) | "
        f"**{len(notify)}** alert-worthy (score ≥ {notify_min_score}, this month)"
    )
    lines.append("")

    if not jobs:
        lines.append("_No matches found within the current month window._")
        lines.append("")
        log.info("Built digest: empty feed")
        return "\n".join(lines)

    lines.append("## Feed (newest first)")
    lines.append("")
    for job in jobs:
        url = resolve_apply_url(job, region)
        tier = age_tier(job.age_hours)
        marker = "\U0001f514 " if job in notify else ""
        lines.append(f"### {marker}{job.title} @ {job.company}")
        lines.append(f"- **Score:** {job.match_score} ({score_tier(job.match_score)})")
        lines.append(f"- **Posted:** {format_published(job)} — {tier.label}")
        lines.append(f"- **Location:** {job.location or region} — {job.employment_type.value}, {job.seniority.value}")
        if job.source:
            lines.append(f"- **Source:** {job.source}")
        if job.skills:
            lines.append(f"- **Skills:** {', '.join(job.skills)}")
        if job.alert_message_en:
            lines.append(f"- **EN:** {job.alert_message_en}")
        if job.alert_message_sv:
            lines.append(f"- **SV:** {job.alert_message_sv}")
        lines.append(f"- **Apply:** [{_short_url_label(url)}]({url})")
        lines.append("")

    lines.append("---")
    lines.append("")
    lines.append("## Quick Reference")
    lines.append("")
    lines.append("| # | Role | Company | Location | Age | Score | Apply |")
    lines.append("|--:|------|---------|----------|-----|------:|-------|")
    for i, job in enumerate(jobs, 1):
        url = resolve_apply_url(job, region)
        loc = (job.location or region).split(",")[0][:18]
        lines.append(
            f"| {i} | {_clip(job.title, 40)} | {_clip(job.company, 22)} | {loc} | "
            f"{age_tier(job.age_hours).label} | {job.match_score} | [{_short_url_label(url)}]({url}) |"
        )
    lines.append("")

    log.info("Built digest: %d jobs, %d alert-worthy", len(jobs), len(notify))
    return "\n".join(lines)


def write_digest(content: str, now: datetime | None = None, directory: Path | None = None) -> Path:
    directory = directory or REPORTS_DIR
    directory.mkdir(parents=True, exist_ok=True)
    date = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%d")
    path = directory / f"alerts_{date}.md"
    path.write_text(content, encoding="utf-8")
    log.info("Digest written → %s", path)
    return path
