"""Failure taxonomy for a single scan or analysis."""
from __future__ import annotations


class AgentError(Exception):
    """Base class; the session turns any of these into one log line."""


class MissingCredential(AgentError):
    """No API key configured; raised before any request is made."""

    def __init__(self, env_key: str = "GROQ_API_KEY") -> None:
        super().__init__(f"API key is missing — set {env_key} in .env")
        self.env_key = env_key


class InvocationFailure(AgentError):
    """The outbound LLM call failed (network, quota, rejected request)."""


class MalformedResponse(AgentError):
    """The LLM answered with text that is not the expected array of job records."""
