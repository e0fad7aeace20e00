#!/usr/bin/env python3
"""Run one market scan (or one text analysis) from the terminal.

Usage:
  python run_scan.py                   # simulated scan of the current month
  python run_scan.py --analyze FILE    # analyze a job description (FILE or - for stdin)
"""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from alert_agent.config import load_settings
from alert_agent.links import resolve_apply_url
from alert_agent.log import get_logger
from alert_agent.presentation import age_tier
from alert_agent.report import build_digest, write_digest
from alert_agent.scanners import get_scanner
from alert_agent.session import AlertSession

log = get_logger(__name__)


def _read_text(arg: str) -> str:
    if arg == "-":
        return sys.stdin.read()
    return Path(arg).read_text(encoding="utf-8")


def main(argv: list[str]) -> int:
    settings = load_settings()
    session = AlertSession(get_scanner(settings), settings)

    if "--analyze" in argv:
        idx = argv.index("--analyze")
        if idx + 1 >= len(argv):
            log.error("--analyze needs a file path (or - for stdin)")
            return 2
        try:
            text = _read_text(argv[idx + 1])
        except (OSError, UnicodeDecodeError) as exc:
            log.error("Cannot read job description %s: %s", argv[idx + 1], exc)
            return 2
        session.analyze_text(text)
    else:
        session.simulate_scan()

    # Session log is newest-first; replay it in order
    for line in reversed(session.logs):
        log.info("%s", line)
    for i, job in enumerate(session.jobs, 1):
        log.info(
            "%2d. [%3d] %-14s %s @ %s — %s",
            i, job.match_score, age_tier(job.age_hours).label,
            job.title, job.company, resolve_apply_url(job, settings.region),
        )

    if session.jobs:
        digest = build_digest(
            session.jobs,
            notify_min_score=settings.notify_min_score,
            region=settings.region,
        )
        write_digest(digest)

    failed = any("ERR:" in line for line in session.logs)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
