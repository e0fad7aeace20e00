"""
Per-user alert session.

Owns the feed, the busy flag and the on-screen log. Every trigger goes
through one path: start → invoke scanner → merge or report → idle.
"""
from __future__ import annotations

from collections import deque
from datetime import datetime
from typing import Callable

from alert_agent.config import Settings
from alert_agent.errors import AgentError
from alert_agent.log import get_logger
from alert_agent.models import JobRecord
from alert_agent.presentation import fresh_count
from alert_agent.reconciler import merge_and_sort
from alert_agent.scanners import JobScanner, ScanMode

log = get_logger(__name__)


def _local_time() -> str:
    return datetime.now().strftime("%H:%M:%S")


class AlertSession:
    def __init__(
        self,
        scanner: JobScanner,
        settings: Settings | None = None,
        *,
        timestamp: Callable[[], str] = _local_time,
    ) -> None:
        self.scanner = scanner
        self.settings = settings or Settings()
        self.timestamp = timestamp
        self.jobs: list[JobRecord] = []
        self.busy = False
        self.last_scan_time: datetime | None = None
        # Newest first; appendleft on a full deque drops the oldest line
        self._logs: deque[str] = deque(maxlen=self.settings.log_capacity)

    @property
    def logs(self) -> list[str]:
        return list(self._logs)

    @property
    def fresh_count(self) -> int:
        return fresh_count(self.jobs)

    def add_log(self, message: str) -> None:
        self._logs.appendleft(f"[{self.timestamp()}] {message}")

    def clear(self) -> None:
        self.jobs = []
        self._logs.clear()
        self.last_scan_time = None

    # ── Triggers ─────────────────────────────────────────────────────────

    def simulate_scan(self) -> list[JobRecord]:
        """Run one market scan; returns the new records (empty on failure)."""
        if not self._ready("Scan failed") or not self._begin():
            return []
        self.add_log("Initiating market scan for current month...")
        self.add_log(f"Targeting sources: {', '.join(self.settings.sources)}...")
        try:
            results = self._invoke(ScanMode.SIMULATE, None, "Scan failed")
            if results is None:
                return []
            if results:
                self._apply(results)
                self.add_log(f"Scan complete. Discovered {len(results)} valid matches from current month.")
            else:
                self.add_log("Scan complete. No matches found within current month window.")
            return results
        finally:
            self._finish()

    def analyze_text(self, text: str) -> list[JobRecord]:
        """Score one pasted job description; blank input is ignored."""
        if not text or not text.strip():
            return []
        if not self._ready("Analysis failed") or not self._begin():
            return []
        self.add_log("Analyzing raw job description...")
        try:
            results = self._invoke(ScanMode.ANALYZE, text, "Analysis failed")
            if results is None:
                return []
            if results:
                self._apply(results)
                self.add_log(f"Analysis complete. Role qualified with score {results[0].match_score}.")
            else:
                self.add_log(
                    f"Analysis complete. Role rejected (Score < {self.settings.notify_min_score} "
                    f"or Non-{self.settings.region}/Old)."
                )
            return results
        finally:
            self._finish()

    # ── Transitions ──────────────────────────────────────────────────────

    def _ready(self, failure: str) -> bool:
        """Credential check ahead of any log line or busy flag."""
        try:
            self.scanner.preflight()
        except Exception as exc:
            self._report(failure, exc)
            return False
        return True

    def _begin(self) -> bool:
        if self.busy:
            self.add_log("Scan already in progress.")
            log.warning("Trigger ignored: scan already in progress")
            return False
        self.busy = True
        return True

    def _finish(self) -> None:
        self.busy = False

    def _invoke(self, mode: ScanMode, text: str | None, failure: str) -> list[JobRecord] | None:
        """Call the scanner; on any failure log one line and return None."""
        try:
            return self.scanner.invoke(mode, text)
        except Exception as exc:
            self._report(failure, exc)
        return None

    def _report(self, failure: str, exc: Exception) -> None:
        if isinstance(exc, AgentError):
            log.error("%s: %s", failure, exc)
        else:
            log.exception("%s with unexpected error", failure)
        self.add_log(f"ERR: {failure}. {str(exc) or type(exc).__name__}")

    def _apply(self, results: list[JobRecord]) -> None:
        self.jobs = merge_and_sort(results, self.jobs)
        self.last_scan_time = datetime.now()
        log.info("Feed now holds %d record(s), %d fresh", len(self.jobs), self.fresh_count)
