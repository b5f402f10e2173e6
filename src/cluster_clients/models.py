"""Pydantic v2 models for registry status, tool outputs, and errors."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field

BackendState = Literal["pending", "constructing", "ready", "failed"]


# --- Shared error model ---


class ClientError(BaseModel):
    """Structured error for a failed backend or request."""

    error: str
    kind: Literal["config", "construction", "request"]
    backend: str
    source: str


# --- Output scrubbing ---

_IP_PATTERN = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")
_BEARER_PATTERN = re.compile(r"\bBearer\s+[\w.~+/-]+=*", re.IGNORECASE)
_TOKEN_FIELD_PATTERN = re.compile(r"(['\"]?(?:token|password|client-key-data)['\"]?\s*[:=]\s*)['\"]?[^\s,'\"}]+['\"]?")


def scrub_sensitive_values(text: str) -> str:
    """Remove IP addresses, bearer tokens and credential fields from text.

    Hostnames and kubeconfig paths are preserved so misconfiguration stays diagnosable.
    """
    if not text:
        return text
    result = _BEARER_PATTERN.sub("Bearer [REDACTED]", text)
    result = _TOKEN_FIELD_PATTERN.sub(r"\1[REDACTED]", result)
    result = _IP_PATTERN.sub("[REDACTED_IP]", result)
    return result


# --- Registry status models ---


class BackendStatus(BaseModel):
    """Construction state of one registry slot."""

    backend: str
    state: BackendState
    error: ClientError | None = None


class RegistryStatus(BaseModel):
    """Output for get_client_status."""

    kubeconfig: str
    api_server_url: str | None = None
    request_timeout_seconds: float | None = None
    backends: list[BackendStatus]
    summary: str
    timestamp: str


# --- Cluster version models ---


class ClusterVersionOutput(BaseModel):
    """Output for get_cluster_version."""

    host: str | None = None
    git_version: str | None = None
    platform: str | None = None
    summary: str
    timestamp: str
    errors: list[ClientError] = Field(default_factory=list)
