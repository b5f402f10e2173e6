"""Shared utility functions used across modules."""

from __future__ import annotations

import re

_DURATION_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")

_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: str | float | int) -> float:
    """Parse a duration into seconds.

    Accepts plain numbers (seconds) or strings with an ``ms``, ``s``, ``m`` or
    ``h`` suffix, e.g. ``"30s"`` or ``"1.5m"``. Zero and negative values are
    returned unchanged; callers treat them as "no timeout".

    Raises:
        ValueError: If the value is not a recognisable duration.
    """
    if isinstance(value, bool):
        msg = f"Invalid duration: {value!r}. Expected a number of seconds or a string like '30s'."
        raise ValueError(msg)
    if isinstance(value, int | float):
        return float(value)

    match = _DURATION_RE.match(str(value))
    if not match:
        msg = f"Invalid duration: {value!r}. Expected a number of seconds or a string like '30s'."
        raise ValueError(msg)
    amount, unit = match.groups()
    return float(amount) * _UNIT_SECONDS[unit or "s"]
