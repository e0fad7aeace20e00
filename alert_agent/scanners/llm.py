"""Scanner backed by an OpenAI-compatible chat endpoint (Groq by default)."""
from __future__ import annotations

import json
from typing import Any, Callable

from alert_agent.config import Settings, get_env
from alert_agent.errors import InvocationFailure, MalformedResponse, MissingCredential
from alert_agent.log import get_logger
from alert_agent.models import JobRecord
from alert_agent.prompts import (
    build_analyze_prompt,
    build_simulate_prompt,
    build_system_instruction,
)
from alert_agent.scanners.base import JobScanner, ScanMode, utc_now

log = get_logger(__name__)

API_KEY_ENV = "GROQ_API_KEY"


def _groq_client(api_key: str, base_url: str) -> Any:
    from openai import OpenAI

    return OpenAI(api_key=api_key, base_url=base_url)


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    # Tolerate prose or ``` fences around the payload
    starts = [i for i in (text.find("["), text.find("{")) if i != -1]
    end = max(text.rfind("]"), text.rfind("}")) + 1
    if not starts or end <= min(starts):
        raise MalformedResponse("LLM did not return valid JSON")
    try:
        return json.loads(text[min(starts):end])
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"LLM did not return valid JSON: {exc.msg}") from exc


def parse_jobs(raw: str | None) -> list[JobRecord]:
    """Decode the model's reply into records, all or nothing.

    Accepts a bare array or an object with the array under ``"jobs"``.
    Empty text means no matches.
    """
    text = (raw or "").strip()
    if not text:
        return []
    data = _loads(text)
    if isinstance(data, dict):
        if "jobs" not in data:
            raise MalformedResponse("Expected a 'jobs' array in the LLM response")
        data = data["jobs"]
    if not isinstance(data, list):
        raise MalformedResponse(f"Expected an array of jobs, got {type(data).__name__}")
    return [JobRecord.from_dict(item) for item in data]


class LLMScanner(JobScanner):
    def __init__(
        self,
        settings: Settings,
        env_getter: Callable[[str], str] = get_env,
        *,
        client_factory: Callable[[str, str], Any] = _groq_client,
        clock=utc_now,
    ) -> None:
        self.settings = settings
        self.env_getter = env_getter
        self.client_factory = client_factory
        self.clock = clock

    def preflight(self) -> None:
        self._api_key()

    def _api_key(self) -> str:
        # Read per call so a key added to .env mid-session is picked up
        api_key = self.env_getter(API_KEY_ENV)
        if not api_key:
            raise MissingCredential(API_KEY_ENV)
        return api_key

    def invoke(self, mode: ScanMode, text: str | None = None) -> list[JobRecord]:
        api_key = self._api_key()

        now = self.clock()
        if mode is ScanMode.SIMULATE:
            prompt = build_simulate_prompt(now, self.settings)
        else:
            if not text or not text.strip():
                raise ValueError("ANALYZE needs a job description")
            prompt = build_analyze_prompt(now, text)

        content = self._complete(api_key, prompt)
        jobs = parse_jobs(content)
        log.info("LLM %s returned %d job(s)", mode.value, len(jobs))
        return jobs

    def _complete(self, api_key: str, prompt: str) -> str:
        from openai import OpenAIError

        client = self.client_factory(api_key, self.settings.base_url)
        try:
            r = client.chat.completions.create(
                model=self.settings.model,
                messages=[
                    {"role": "system", "content": build_system_instruction(self.settings)},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except OpenAIError as exc:
            log.error("LLM call failed: %s", exc)
            raise InvocationFailure(str(exc)) from exc
        if not r.choices:
            raise MalformedResponse("LLM returned no choices")
        return (r.choices[0].message.content or "").strip()
