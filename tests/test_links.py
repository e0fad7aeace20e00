"""
Tests for Apply-button URL resolution.
"""

import pytest

from conftest import make_job
from alert_agent.links import is_usable_url, resolve_apply_url


class TestPassthrough:
    """Real apply URLs are returned untouched."""

    def test_trusted_url_returned_verbatim(self):
        job = make_job(apply_url="https://company.example/apply/123")
        assert resolve_apply_url(job) == "https://company.example/apply/123"

    @pytest.mark.parametrize("url", ["", "http", "https://example.com/job/1", "www.example.com"])
    def test_unusable_urls(self, url):
        assert not is_usable_url(url)

    def test_five_chars_is_enough(self):
        assert is_usable_url("a.se/")


class TestFallback:
    """Placeholder or missing URLs become job-board searches."""

    def test_linkedin_search(self):
        job = make_job("Data Engineer", "Acme", location="Stockholm", source="LinkedIn", apply_url="")
        url = resolve_apply_url(job)
        assert url.startswith("https://www.linkedin.com/jobs/search/")
        assert "keywords=Data%20Engineer%20Acme" in url
        assert "location=Stockholm" in url

    def test_platsbanken_ignores_location(self):
        job = make_job("BI Developer", "Kommun", location="Umeå", source="Arbetsförmedlingen / Platsbanken")
        url = resolve_apply_url(job)
        assert url == "https://platsbanken.arbetsformedlingen.se/platsannonser/sok?q=BI%20Developer%20Kommun"

    def test_arbetsformedlingen_alone_matches(self):
        job = make_job(source="ARBETSFÖRMEDLINGEN")
        assert "platsbanken.arbetsformedlingen.se" in resolve_apply_url(job)

    def test_indeed_search(self):
        job = make_job("Data Analyst", "Västkust", location="Malmö", source="Indeed SE")
        url = resolve_apply_url(job)
        assert url == "https://se.indeed.com/jobs?q=Data%20Analyst%20V%C3%A4stkust&l=Malm%C3%B6"

    def test_unknown_source_uses_web_search(self):
        job = make_job(
            "Data Engineer", "Acme", location="Gothenburg",
            source="Unknown Board", apply_url="https://example.com/job/1",
        )
        url = resolve_apply_url(job)
        assert url == "https://www.google.com/search?q=Data%20Engineer%20Acme+job+Gothenburg"
        for board in ("linkedin", "platsbanken", "indeed"):
            assert board not in url

    def test_empty_location_defaults_to_region(self):
        job = make_job(location="", source="LinkedIn")
        assert resolve_apply_url(job).endswith("location=Sweden")
        assert resolve_apply_url(job, "Norway").endswith("location=Norway")

    def test_empty_everything_still_gives_url(self):
        job = make_job(title="", company="", location="", source="", apply_url="")
        url = resolve_apply_url(job)
        assert url.startswith("https://www.google.com/search?q=")

    def test_encodes_like_encode_uri_component(self):
        job = make_job("C# & .NET (Senior)", "A/B", source="LinkedIn")
        url = resolve_apply_url(job)
        assert "keywords=C%23%20%26%20.NET%20(Senior)%20A%2FB" in url

    def test_idempotent(self):
        job = make_job(source="Indeed", apply_url="")
        assert resolve_apply_url(job) == resolve_apply_url(job)
