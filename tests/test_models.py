"""
Tests for decoding LLM output into job records.
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from alert_agent.errors import MalformedResponse
from alert_agent.models import EmploymentType, JobRecord, Seniority, parse_timestamp


class TestFromDict:
    """Wire format → JobRecord."""

    def test_full_record(self, raw_job):
        job = JobRecord.from_dict(raw_job)
        assert job.title == "BI Developer"
        assert job.employment_type is EmploymentType.PERMANENT
        assert job.seniority is Seniority.SENIOR
        assert job.age_hours == 27.5
        assert job.match_score == 88
        assert job.skills == ("Power BI", "SQL")
        assert job.source == "Platsbanken"

    def test_round_trips_to_wire(self, raw_job):
        assert JobRecord.from_dict(raw_job).to_dict() == raw_job

    def test_optional_fields_default(self, raw_job):
        for key in ("employment_type", "seniority", "source", "apply_url"):
            raw_job.pop(key)
        job = JobRecord.from_dict(raw_job)
        assert job.employment_type is EmploymentType.UNKNOWN
        assert job.seniority is Seniority.UNKNOWN
        assert job.source == ""
        assert job.apply_url == ""

    def test_unknown_enum_value_decodes_to_unknown(self, raw_job):
        raw_job["employment_type"] = "Freelance"
        raw_job["seniority"] = "Lead"
        job = JobRecord.from_dict(raw_job)
        assert job.employment_type is EmploymentType.UNKNOWN
        assert job.seniority is Seniority.UNKNOWN

    def test_float_score_is_rounded(self, raw_job):
        raw_job["match_score"] = 87.6
        assert JobRecord.from_dict(raw_job).match_score == 88

    @pytest.mark.parametrize("key", [
        "job_title", "company", "primary_role", "location", "publish_date_utc",
        "job_age_hours", "match_score", "key_skills", "alert_message_en", "alert_message_sv",
    ])
    def test_missing_required_field(self, raw_job, key):
        raw_job.pop(key)
        with pytest.raises(MalformedResponse, match=key):
            JobRecord.from_dict(raw_job)

    @pytest.mark.parametrize("key,value", [
        ("job_title", 12),
        ("match_score", "88"),
        ("match_score", True),
        ("job_age_hours", None),
        ("job_age_hours", float("nan")),
        ("key_skills", "SQL, Python"),
        ("key_skills", ["SQL", 3]),
        ("apply_url", 42),
    ])
    def test_wrong_types(self, raw_job, key, value):
        raw_job[key] = value
        with pytest.raises(MalformedResponse):
            JobRecord.from_dict(raw_job)

    @pytest.mark.parametrize("key", ["match_score", "job_age_hours"])
    def test_number_too_large_for_float(self, raw_job, key):
        raw_job[key] = 10 ** 400
        with pytest.raises(MalformedResponse, match="out of range"):
            JobRecord.from_dict(raw_job)

    def test_not_an_object(self):
        with pytest.raises(MalformedResponse):
            JobRecord.from_dict(["job_title"])

    def test_records_are_immutable(self, raw_job):
        job = JobRecord.from_dict(raw_job)
        with pytest.raises(dataclasses.FrozenInstanceError):
            job.match_score = 1


class TestParseTimestamp:
    def test_zulu(self):
        assert parse_timestamp("2026-10-18T08:30:00Z") == datetime(2026, 10, 18, 8, 30, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self):
        dt = parse_timestamp("2026-10-18T10:30:00+02:00")
        assert dt == datetime(2026, 10, 18, 8, 30, tzinfo=timezone.utc)
        assert dt.tzinfo == timezone.utc

    def test_naive_taken_as_utc(self):
        assert parse_timestamp("2026-10-18T08:30:00").tzinfo == timezone.utc

    @pytest.mark.parametrize("value", ["", "   ", "2 days ago", "2026-13-40"])
    def test_unparsable(self, value):
        assert parse_timestamp(value) is None

    @pytest.mark.parametrize("value", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:30:00-01:00"])
    def test_outside_representable_range(self, value):
        assert parse_timestamp(value) is None
