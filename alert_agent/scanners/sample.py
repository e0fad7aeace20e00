"""Offline scanner: a fixed batch of Swedish postings for demos and tests."""
from __future__ import annotations

import re
from datetime import datetime, timedelta

from alert_agent.config import Settings
from alert_agent.log import get_logger
from alert_agent.models import EmploymentType, JobRecord, Seniority
from alert_agent.prompts import iso_now
from alert_agent.scanners.base import JobScanner, ScanMode, utc_now

log = get_logger(__name__)

# (title, company, location, type, seniority, hours ago, score, skills, source)
_SAMPLE_POSTINGS: list[tuple] = [
    ("Data Engineer", "Nordlys Energi AB", "Stockholm", EmploymentType.PERMANENT,
     Seniority.MID, 3, 92, ("Python", "Databricks", "Azure", "SQL"), "LinkedIn"),
    ("BI Developer", "Kvarnby Logistik", "Malmö", EmploymentType.PERMANENT,
     Seniority.SENIOR, 9, 88, ("Power BI", "SQL", "DAX", "Azure"), "Platsbanken"),
    ("Analytics Engineer", "Fjällhem Bank", "Remote SE", EmploymentType.CONTRACT,
     Seniority.MID, 20, 81, ("dbt", "Snowflake", "SQL"), "Indeed"),
    ("Data Analyst", "Västkust Retail", "Gothenburg", EmploymentType.PERMANENT,
     Seniority.JUNIOR, 30, 74, ("SQL", "Tableau", "Excel"), "LinkedIn"),
    ("Business Intelligence Analyst", "Sundsvall Kommun", "Sundsvall", EmploymentType.PERMANENT,
     Seniority.MID, 44, 79, ("Power BI", "SQL"), "Arbetsförmedlingen"),
    ("Data Engineer", "Östra Vården", "Uppsala", EmploymentType.CONTRACT,
     Seniority.SENIOR, 60, 86, ("Spark", "Azure", "Python"), "StepStone"),
    ("BI Developer", "Lindqvist Konsult", "Stockholm", EmploymentType.UNKNOWN,
     Seniority.UNKNOWN, 96, 68, ("Qlik", "SQL"), "Company careers"),
    ("Data Analyst", "Norrsken Media", "Linköping", EmploymentType.PERMANENT,
     Seniority.MID, 150, 63, ("Python", "SQL", "Looker"), "Indeed"),
]

_KNOWN_SKILLS: list[str] = [
    "SQL", "Power BI", "Python", "Azure", "Databricks", "Snowflake",
    "dbt", "Tableau", "Spark", "DAX", "Qlik", "Looker", "Excel",
]
_CLOUD_SKILLS = {"azure", "databricks", "snowflake"}
_CITIES: list[str] = [
    "Stockholm", "Gothenburg", "Göteborg", "Malmö", "Uppsala",
    "Linköping", "Örebro", "Västerås", "Umeå", "Sundsvall",
]
_COMPANY_RE = re.compile(r"^\s*(?:company|företag|arbetsgivare)\s*[:\-]\s*(.+)$", re.IGNORECASE | re.MULTILINE)
_URL_RE = re.compile(r"https?://\S+")


def _alerts(title: str, company: str, hours: float) -> tuple[str, str]:
    if hours <= 48:
        return (
            f"New {title} role at {company}, posted {hours:g} hours ago. Apply early.",
            f"Ny tjänst som {title} hos {company}, publicerad för {hours:g} timmar sedan. Sök tidigt.",
        )
    return (
        f"{title} role at {company} is still open this month.",
        f"Tjänsten som {title} hos {company} är fortfarande öppen denna månad.",
    )


class SampleScanner(JobScanner):
    def __init__(self, settings: Settings, clock=utc_now) -> None:
        self.settings = settings
        self.clock = clock

    def invoke(self, mode: ScanMode, text: str | None = None) -> list[JobRecord]:
        now = self.clock()
        if mode is ScanMode.SIMULATE:
            return self._simulate(now)
        return self._analyze(now, text or "")

    def _simulate(self, now: datetime) -> list[JobRecord]:
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        jobs: list[JobRecord] = []
        for title, company, location, etype, level, hours, score, skills, source in _SAMPLE_POSTINGS:
            published = now - timedelta(hours=hours)
            if published < month_start:
                continue
            en, sv = _alerts(title, company, hours)
            jobs.append(JobRecord(
                title=title,
                company=company,
                primary_role=title,
                location=location,
                employment_type=etype,
                seniority=level,
                published_at_utc=iso_now(published),
                age_hours=float(hours),
                match_score=score,
                skills=skills,
                source=source,
                apply_url="",
                alert_message_en=en,
                alert_message_sv=sv,
            ))
        log.info("SampleScanner generated %d posting(s)", len(jobs))
        return jobs

    def _analyze(self, now: datetime, text: str) -> list[JobRecord]:
        low = text.lower()
        role = next((r for r in self.settings.target_roles if r.lower() in low), None)
        if role is None:
            log.info("SampleScanner: no target role in text")
            return []

        skills = tuple(s for s in _KNOWN_SKILLS if s.lower() in low)
        score = 30 + 5 * len(skills) + 10  # exact role + skills + just posted
        if {"sql", "power bi"} & {s.lower() for s in skills}:
            score += 10
        if _CLOUD_SKILLS & {s.lower() for s in skills}:
            score += 10
        score = min(score, 100)
        if score < self.settings.notify_min_score:
            log.info("SampleScanner: %s scored %d, below threshold", role, score)
            return []

        lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
        title = lines[0][:80] if lines else role
        company_match = _COMPANY_RE.search(text)
        company = company_match.group(1).strip() if company_match else "Unknown company"
        location = next((c for c in _CITIES if c.lower() in low), self.settings.region)
        url_match = _URL_RE.search(text)
        en, sv = _alerts(title, company, 0)
        return [JobRecord(
            title=title,
            company=company,
            primary_role=role,
            location=location,
            published_at_utc=iso_now(now),
            age_hours=0.0,
            match_score=score,
            skills=skills,
            source="Pasted text",
            apply_url=url_match.group(0) if url_match else "",
            alert_message_en=en,
            alert_message_sv=sv,
        )]
