from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum

from alert_agent.models import JobRecord


class ScanMode(str, Enum):
    SIMULATE = "SIMULATE"
    ANALYZE = "ANALYZE"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JobScanner(ABC):
    def preflight(self) -> None:
        """Raise an AgentError if a scan cannot start (e.g. no credential)."""

    @abstractmethod
    def invoke(self, mode: ScanMode, text: str | None = None) -> list[JobRecord]:
        """Return a batch of records or raise an AgentError."""
