"""Pick the URL behind a job card's Apply button."""
from __future__ import annotations

from urllib.parse import quote

from alert_agent.models import JobRecord

DEFAULT_REGION = "Sweden"
PLACEHOLDER_HOST = "example.com"
MIN_URL_LENGTH = 5

LINKEDIN_SEARCH = "https://www.linkedin.com/jobs/search/?keywords={q}&location={loc}"
PLATSBANKEN_SEARCH = "https://platsbanken.arbetsformedlingen.se/platsannonser/sok?q={q}"
INDEED_SEARCH = "https://se.indeed.com/jobs?q={q}&l={loc}"
WEB_SEARCH = "https://www.google.com/search?q={q}+job+{loc}"

# Same unreserved set as JavaScript's encodeURIComponent
_SAFE = "-_.!~*'()"


def _encode(text: str) -> str:
    return quote(text, safe=_SAFE)


def is_usable_url(url: str) -> bool:
    return bool(url) and len(url) >= MIN_URL_LENGTH and PLACEHOLDER_HOST not in url


def resolve_apply_url(job: JobRecord, default_region: str = DEFAULT_REGION) -> str:
    """Return the record's own apply URL, or a job-board search for it.

    Never empty: when the LLM left ``apply_url`` blank or gave a
    placeholder, the search is built from title, company and location on
    the board named by ``job.source``.
    """
    if is_usable_url(job.apply_url):
        return job.apply_url

    q = _encode(f"{job.title} {job.company}")
    loc = _encode(job.location or default_region)
    source = (job.source or "").lower()

    if "linkedin" in source:
        return LINKEDIN_SEARCH.format(q=q, loc=loc)
    if "arbetsförmedlingen" in source or "platsbanken" in source:
        # Platsbanken's simple search takes no location parameter
        return PLATSBANKEN_SEARCH.format(q=q)
    if "indeed" in source:
        return INDEED_SEARCH.format(q=q, loc=loc)
    return WEB_SEARCH.format(q=q, loc=loc)
