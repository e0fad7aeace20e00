"""Data models for job alert records."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from alert_agent.errors import MalformedResponse


class EmploymentType(str, Enum):
    PERMANENT = "Permanent"
    CONTRACT = "Contract"
    UNKNOWN = "Unknown"


class Seniority(str, Enum):
    JUNIOR = "Junior"
    MID = "Mid"
    SENIOR = "Senior"
    UNKNOWN = "Unknown"


_STRING_FIELDS: dict[str, str] = {
    "job_title": "title",
    "company": "company",
    "primary_role": "primary_role",
    "location": "location",
    "publish_date_utc": "published_at_utc",
    "alert_message_en": "alert_message_en",
    "alert_message_sv": "alert_message_sv",
}


def parse_timestamp(value: str) -> datetime | None:
    """ISO-8601 → aware UTC datetime; naive values are taken as UTC."""
    text = (value or "").strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        # Offsets next to year 1 or 9999 can leave the representable range
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class JobRecord:
    title: str
    company: str
    primary_role: str
    location: str
    published_at_utc: str
    age_hours: float
    match_score: int
    employment_type: EmploymentType = EmploymentType.UNKNOWN
    seniority: Seniority = Seniority.UNKNOWN
    skills: tuple[str, ...] = field(default_factory=tuple)
    source: str = ""
    apply_url: str = ""
    alert_message_en: str = ""
    alert_message_sv: str = ""

    @property
    def published_at(self) -> datetime | None:
        return parse_timestamp(self.published_at_utc)

    @classmethod
    def from_dict(cls, raw: Any) -> "JobRecord":
        """Decode one object of the LLM's output array.

        Raises MalformedResponse when a required key is missing or has the
        wrong type. Enum values outside the schema decode to ``Unknown``.
        """
        if not isinstance(raw, dict):
            raise MalformedResponse(f"Expected a job object, got {type(raw).__name__}")

        values: dict[str, Any] = {}
        for key, attr in _STRING_FIELDS.items():
            if key not in raw:
                raise MalformedResponse(f"Job record missing '{key}'")
            if not isinstance(raw[key], str):
                raise MalformedResponse(f"'{key}' must be a string")
            values[attr] = raw[key]

        values["age_hours"] = float(_number(raw, "job_age_hours"))
        values["match_score"] = int(round(_number(raw, "match_score")))

        skills = raw.get("key_skills")
        if "key_skills" not in raw:
            raise MalformedResponse("Job record missing 'key_skills'")
        if not isinstance(skills, list) or not all(isinstance(s, str) for s in skills):
            raise MalformedResponse("'key_skills' must be a list of strings")
        values["skills"] = tuple(skills)

        for key in ("source", "apply_url"):
            value = raw.get(key) or ""
            if not isinstance(value, str):
                raise MalformedResponse(f"'{key}' must be a string")
            values[key] = value

        values["employment_type"] = _enum(EmploymentType, raw.get("employment_type"))
        values["seniority"] = _enum(Seniority, raw.get("seniority"))
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "job_title": self.title,
            "company": self.company,
            "primary_role": self.primary_role,
            "location": self.location,
            "employment_type": self.employment_type.value,
            "seniority": self.seniority.value,
            "publish_date_utc": self.published_at_utc,
            "job_age_hours": self.age_hours,
            "match_score": self.match_score,
            "key_skills": list(self.skills),
            "source": self.source,
            "apply_url": self.apply_url,
            "alert_message_en": self.alert_message_en,
            "alert_message_sv": self.alert_message_sv,
        }


def _number(raw: dict[str, Any], key: str) -> float:
    if key not in raw:
        raise MalformedResponse(f"Job record missing '{key}'")
    value = raw[key]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse(f"'{key}' must be a number")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        raise MalformedResponse(f"'{key}' is out of range") from None
    if not finite:
        raise MalformedResponse(f"'{key}' must be finite")
    return value


def _enum(kind: type[Enum], value: Any) -> Any:
    for member in kind:
        if member.value == value:
            return member
    return kind("Unknown")
