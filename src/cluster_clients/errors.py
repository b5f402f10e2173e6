"""Exception types raised by the resolver and the client registry."""

from __future__ import annotations

from typing import Literal


class ClusterClientsError(Exception):
    """Base class for credential resolution and client construction failures.

    ``source`` always names the credential source that was attempted so the
    first failure for a backend can be diagnosed from the message alone.
    ``kind`` is the error category reported in status output.
    """

    kind: Literal["config", "construction"] = "construction"

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        self.message = message
        super().__init__(self._format())

    def _format(self) -> str:
        return f"{self.message} (source: {self.source})"


class ConfigError(ClusterClientsError):
    """The credential source is missing, unreadable or malformed."""

    kind = "config"

    def _format(self) -> str:
        return f"Failed to load connection config from {self.source}: {self.message}"


class ClientConstructionError(ClusterClientsError):
    """A backend factory failed after configuration was resolved."""

    def __init__(self, backend: str, source: str, message: str) -> None:
        self.backend = backend
        super().__init__(source, message)

    def _format(self) -> str:
        return f"Failed to construct {self.backend} client using {self.source}: {self.message}"
