"""Prompt text and output schema for the job alert LLM.

SYSTEM_TEMPLATE   — the standing instructions, filled from Settings.
JOB_SCHEMA        — JSON schema of one record, embedded in the instructions.
REQUIRED_FIELDS   — keys every record must carry.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone

from alert_agent.config import Settings

REQUIRED_FIELDS: tuple[str, ...] = (
    "job_title", "company", "primary_role", "location",
    "publish_date_utc", "job_age_hours",
    "match_score", "key_skills", "alert_message_en", "alert_message_sv",
)

JOB_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "job_title": {"type": "string"},
        "company": {"type": "string"},
        "primary_role": {"type": "string"},
        "location": {"type": "string"},
        "employment_type": {"type": "string", "enum": ["Permanent", "Contract", "Unknown"]},
        "seniority": {"type": "string", "enum": ["Junior", "Mid", "Senior", "Unknown"]},
        "publish_date_utc": {"type": "string", "description": "ISO 8601 UTC date string"},
        "job_age_hours": {"type": "number", "description": "Hours since posting"},
        "match_score": {"type": "integer"},
        "key_skills": {"type": "array", "items": {"type": "string"}},
        "source": {"type": "string"},
        "apply_url": {"type": "string"},
        "alert_message_en": {"type": "string"},
        "alert_message_sv": {"type": "string"},
    },
    "required": list(REQUIRED_FIELDS),
}

# ---------------------------------------------------------------------------
# System instructions
# ---------------------------------------------------------------------------

SYSTEM_TEMPLATE = """\
You are an autonomous Job Discovery & Alert Agent for the {region_adj} job market.

CRITICAL OBJECTIVE (HIGHEST PRIORITY):
Always surface the MOST RECENT valid job postings first.
Recency is more important than match score.

PRIMARY SOURCES (AUTHORITATIVE):
- Arbetsförmedlingen / Platsbanken (platsbanken.arbetsformedlingen.se)
- LinkedIn Jobs
- Indeed
- StepStone
- Monster
- Company career pages in {region}

SOURCE-SPECIFIC RULES (IMPORTANT):
1. ARBETSFÖRMEDLINGEN / PLATSBANKEN
- Treat "publicerad", "annonserad", or "publiceringsdatum" as the ONLY valid posting date.
- Ignore last-modified, refreshed, or crawl timestamps.
- If no explicit publish date exists, discard the job.

2. LINKEDIN / OTHER BOARDS
- Use the platform's native "posted X days ago" or equivalent.
- Convert relative dates to absolute UTC timestamps.

GLOBAL RECENCY RULES (NON-NEGOTIABLE):
- Scope: Current Month (jobs published within the current calendar month).
- Priority: Freshness is key. Jobs < 72 hours should be scored higher.
- Sort order must ALWAYS be:
  1. Newest publish date (DESC)
  2. Match score (DESC)

DUPLICATION & REPOST CONTROL:
- Reposts are NOT new jobs. Do not resurface them.

TARGET ROLES (STRICT):
{target_roles}

FILTER OUT COMPLETELY:
{excluded_roles}

LOCATION RULES:
- {region} only
- Remote allowed ONLY if explicitly {region}-based
- Discard jobs requiring relocation outside {region}

SCORING (SECONDARY TO RECENCY):
+30 exact role match
+5 per matching skill
+10 Power BI or SQL
+10 Azure / Databricks / Snowflake
+10 Posted within last 48 hours
-50 if role is not clearly data-centric

NOTIFICATION RULE:
- Notify ONLY when:
  - Job is from current month
  - Match score >= {notify_min_score}

OUTPUT FORMAT (JSON ONLY):
Return a single JSON object {{"jobs": [...]}} where every element follows this schema:
{schema}

ALERT MESSAGE RULES:
- Mention recency explicitly if <= 48h
- Short, human, actionable
- alert_message_en in English, alert_message_sv in Swedish
- No emojis
- No marketing language

BEHAVIOR GUARANTEES:
- Never hallucinate publish dates
- Never guess recency
- Silence is correct if no new jobs exist: return {{"jobs": []}}
- Freshness beats relevance
- Arbetsförmedlingen dates override all other timestamps
"""


def _region_adjective(region: str) -> str:
    return "Swedish" if region.lower() == "sweden" else region


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items) or "- (none)"


def build_system_instruction(settings: Settings) -> str:
    region = settings.region
    return SYSTEM_TEMPLATE.format(
        region=region,
        region_adj=_region_adjective(region),
        target_roles=_bullets(settings.target_roles),
        excluded_roles=_bullets(settings.excluded_roles),
        notify_min_score=settings.notify_min_score,
        schema=json.dumps(JOB_SCHEMA, indent=2, ensure_ascii=False),
    )


# ---------------------------------------------------------------------------
# Per-request prompts
# ---------------------------------------------------------------------------

SIMULATE_TEMPLATE = """\
CURRENT SYSTEM DATE: {now_iso}
TARGET MONTH: {month}

Act as if you have just scanned the latest {region_adj} job boards ({sources}).

Generate {batch_min} to {batch_max} realistic, high-quality NEW job postings published in {month}.

INSTRUCTIONS:
1. All 'publish_date_utc' MUST be within {month} and NOT in the future relative to {now_iso}.
2. Prioritize recently posted jobs (last 24-72 hours) but include valid hits from earlier in the month if high quality.
3. Calculate 'job_age_hours' precisely based on the difference between 'publish_date_utc' and {now_iso}.
4. Ensure diversity in location (Stockholm, Gothenburg, Malmö, Remote SE).
5. CRITICAL: For 'apply_url', return an empty string "". Do NOT invent URLs. The frontend will generate valid search links dynamically.

Return the data strictly as JSON.
"""

ANALYZE_TEMPLATE = """\
CURRENT SYSTEM DATE: {now_iso}

Analyze the following raw job description text.
Extract the details, classify the role, and calculate the match score based on the system instructions.

CRITICAL: Extract the date posted if available in the text.
- If a relative date (e.g., "2 days ago") is found, calculate the absolute date based on {now_iso}.
- If no date is found, use {now_iso} and set 'job_age_hours' to 0.

For 'apply_url', try to find the specific application link in the text. If not found, leave empty string (UI will handle fallback).
Return zero jobs if the role does not qualify, otherwise exactly one.

RAW TEXT:
{text}
"""


def iso_now(now: datetime) -> str:
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def month_label(now: datetime) -> str:
    return now.strftime("%B %Y")


def build_simulate_prompt(now: datetime, settings: Settings) -> str:
    region = settings.region
    return SIMULATE_TEMPLATE.format(
        now_iso=iso_now(now),
        month=month_label(now),
        region_adj=_region_adjective(region),
        sources=", ".join(settings.sources),
        batch_min=settings.batch_min,
        batch_max=settings.batch_max,
    )


def build_analyze_prompt(now: datetime, text: str) -> str:
    return ANALYZE_TEMPLATE.format(now_iso=iso_now(now), text=text.strip())
