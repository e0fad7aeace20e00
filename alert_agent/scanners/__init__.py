from .base import JobScanner, ScanMode, utc_now
from .llm import LLMScanner, parse_jobs
from .sample import SampleScanner

from alert_agent.config import Settings, get_env
from alert_agent.log import get_logger

log = get_logger(__name__)

__all__ = [
    "JobScanner", "ScanMode", "LLMScanner", "SampleScanner",
    "parse_jobs", "utc_now", "get_scanner",
]


def get_scanner(settings: Settings, env_getter=get_env) -> JobScanner:
    kind = (settings.scanner or "llm").lower()

    if kind == "sample":
        log.info("Using scanner: SampleScanner (offline, deterministic)")
        return SampleScanner(settings)

    if kind != "llm":
        log.warning("Unknown scanner '%s' — falling back to LLM", settings.scanner)
    log.info("Using scanner: LLM (%s @ %s)", settings.model, settings.base_url)
    return LLMScanner(settings, env_getter)
