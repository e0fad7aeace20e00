"""Load agent settings and env configuration."""
from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from alert_agent.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "agent.yaml"
REPORTS_DIR: Path = ROOT_DIR / "reports"

DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"

DEFAULTS: dict[str, Any] = {
    "region": "Sweden",
    "sources": ["Platsbanken", "LinkedIn", "Indeed"],
    "target_roles": [
        "Data Analyst",
        "Business Intelligence Analyst",
        "Business Intelligence Developer",
        "BI Developer",
        "Data Engineer",
        "Analytics Engineer",
    ],
    "excluded_roles": [
        "Marketing Analyst",
        "Business Controller",
        "Product Owner",
        "Finance roles without BI/Analytics focus",
        "Non-data roles",
    ],
    "notify_min_score": 60,
    "batch_size": {"min": 25, "max": 30},
    "log_capacity": 50,
    "scanner": "llm",
    "llm": {
        "model": DEFAULT_MODEL,
        "base_url": DEFAULT_BASE_URL,
        "temperature": 0.4,
        "max_tokens": 8000,
    },
}


@dataclass(frozen=True)
class Settings:
    region: str = DEFAULTS["region"]
    sources: list[str] = field(default_factory=lambda: list(DEFAULTS["sources"]))
    target_roles: list[str] = field(default_factory=lambda: list(DEFAULTS["target_roles"]))
    excluded_roles: list[str] = field(default_factory=lambda: list(DEFAULTS["excluded_roles"]))
    notify_min_score: int = DEFAULTS["notify_min_score"]
    batch_min: int = DEFAULTS["batch_size"]["min"]
    batch_max: int = DEFAULTS["batch_size"]["max"]
    log_capacity: int = DEFAULTS["log_capacity"]
    scanner: str = DEFAULTS["scanner"]
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    temperature: float = DEFAULTS["llm"]["temperature"]
    max_tokens: int = DEFAULTS["llm"]["max_tokens"]


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay *override* on a copy of *base*."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        log.debug("No settings file at %s — using defaults", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        log.warning("Failed to read %s (%s) — using defaults", path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring %s: expected a mapping at top level", path)
        return {}
    return data


def load_settings(path: Path | None = None) -> Settings:
    """Defaults ← config/agent.yaml ← environment overrides."""
    data = _merge(DEFAULTS, _read_yaml(path or SETTINGS_PATH))
    llm = data.get("llm") or {}
    batch = data.get("batch_size") or {}

    settings = Settings(
        region=str(data.get("region") or DEFAULTS["region"]),
        sources=[str(s) for s in data.get("sources") or []],
        target_roles=[str(r) for r in data.get("target_roles") or []],
        excluded_roles=[str(r) for r in data.get("excluded_roles") or []],
        notify_min_score=int(data.get("notify_min_score", DEFAULTS["notify_min_score"])),
        batch_min=int(batch.get("min", DEFAULTS["batch_size"]["min"])),
        batch_max=int(batch.get("max", DEFAULTS["batch_size"]["max"])),
        log_capacity=int(data.get("log_capacity", DEFAULTS["log_capacity"])),
        scanner=get_env("ALERT_AGENT_SCANNER") or str(data.get("scanner") or "llm"),
        model=get_env("GROQ_LLM_MODEL") or str(llm.get("model") or DEFAULT_MODEL),
        base_url=get_env("LLM_BASE_URL") or str(llm.get("base_url") or DEFAULT_BASE_URL),
        temperature=float(llm.get("temperature", DEFAULTS["llm"]["temperature"])),
        max_tokens=int(llm.get("max_tokens", DEFAULTS["llm"]["max_tokens"])),
    )
    log.debug("Loaded settings: scanner=%s model=%s region=%s", settings.scanner, settings.model, settings.region)
    return settings
