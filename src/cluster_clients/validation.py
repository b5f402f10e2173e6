"""Input validation helpers for connection settings and backend names."""

from __future__ import annotations

import math
from collections.abc import Iterable
from urllib.parse import urlsplit

_VALID_URL_SCHEMES = {"http", "https"}


def validate_api_server_url(url: str) -> None:
    """Validate an API server endpoint override. An empty string means no override."""
    if not url:
        return
    parts = urlsplit(url)
    if parts.scheme not in _VALID_URL_SCHEMES or not parts.netloc:
        valid = ", ".join(sorted(_VALID_URL_SCHEMES))
        msg = f"Invalid API server URL: {url!r}. Must be an absolute URL with scheme {valid}."
        raise ValueError(msg)


def validate_request_timeout(timeout: float) -> None:
    """Validate a request timeout in seconds. Zero or negative means no timeout."""
    if isinstance(timeout, bool) or not isinstance(timeout, int | float):
        msg = f"Invalid request timeout: {timeout!r}. Must be a number of seconds."
        raise ValueError(msg)
    if math.isnan(timeout) or math.isinf(timeout):
        msg = f"Invalid request timeout: {timeout!r}. Must be finite."
        raise ValueError(msg)


def validate_backend(backend: str, valid_backends: Iterable[str]) -> None:
    """Validate a backend name against the registry's known slots."""
    known = set(valid_backends)
    if backend not in known:
        valid = ", ".join(sorted(known))
        msg = f"Unknown backend {backend!r}. Valid backends: {valid}"
        raise ValueError(msg)
