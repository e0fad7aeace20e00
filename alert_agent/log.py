"""Logging setup shared by the UI, the CLI and the tests.

Records go to stdout and, unless ``LOG_TO_FILE`` is off, to a daily
``alerts_YYYY-MM-DD.log`` under ``logs/`` (or ``$LOG_DIR``). ``LOG_LEVEL``
sets the threshold for both.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path

_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMATTER = logging.Formatter(
    "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
)
_OFF = ("0", "false", "no", "off")
_configured = False


def get_logger(name: str) -> logging.Logger:
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def log_dir() -> Path:
    override = os.environ.get("LOG_DIR", "").strip()
    return Path(override) if override else _DEFAULT_LOG_DIR


def console_level() -> int:
    level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def file_logging_enabled() -> bool:
    return os.environ.get("LOG_TO_FILE", "true").strip().lower() not in _OFF


def file_handler(directory: Path, day: date | None = None) -> logging.FileHandler:
    directory.mkdir(parents=True, exist_ok=True)
    day = day or date.today()
    handler = logging.FileHandler(directory / f"alerts_{day:%Y-%m-%d}.log", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(_FORMATTER)
    return handler


def _configure() -> None:
    level = console_level()
    root = logging.getLogger()
    root.setLevel(level)

    # Streamlit and pytest install their own handlers
    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(_FORMATTER)
    root.addHandler(console)

    if not file_logging_enabled():
        return
    try:
        root.addHandler(file_handler(log_dir()))
    except OSError as exc:
        root.warning("File logging disabled, cannot write to %s: %s", log_dir(), exc)
