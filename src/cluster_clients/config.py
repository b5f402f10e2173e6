"""Connection configuration with environment variable and YAML file overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cluster_clients.utils import parse_duration
from cluster_clients.validation import validate_api_server_url, validate_request_timeout

ENV_CONFIG_FILE = "CLUSTER_CLIENTS_CONFIG"
ENV_KUBECONFIG = "CLUSTER_CLIENTS_KUBECONFIG"
ENV_API_SERVER_URL = "CLUSTER_CLIENTS_API_SERVER_URL"
ENV_REQUEST_TIMEOUT = "CLUSTER_CLIENTS_REQUEST_TIMEOUT"

DEFAULT_REQUEST_TIMEOUT = "30s"

AUTO_SOURCE = "auto (~/.kube/config or in-cluster service account)"


@dataclass(frozen=True)
class ConnectionConfig:
    """Shared connection settings for every backend in a registry.

    ``kubeconfig`` and ``api_server_url`` may be empty. A ``request_timeout``
    of zero or less disables the per-request deadline.
    """

    kubeconfig: str = field(default_factory=lambda: os.environ.get(ENV_KUBECONFIG, ""))
    api_server_url: str = field(default_factory=lambda: os.environ.get(ENV_API_SERVER_URL, ""))
    request_timeout: float = field(
        default_factory=lambda: parse_duration(os.environ.get(ENV_REQUEST_TIMEOUT, DEFAULT_REQUEST_TIMEOUT))
    )

    def __post_init__(self) -> None:
        validate_api_server_url(self.api_server_url)
        validate_request_timeout(self.request_timeout)

    @property
    def has_timeout(self) -> bool:
        return self.request_timeout > 0

    @property
    def credential_source(self) -> str:
        """Human-readable name of the credential source, for error messages."""
        return self.kubeconfig or AUTO_SOURCE


_ALLOWED_KEYS = ("kubeconfig", "api_server_url", "request_timeout")


def load_connection_config(path: Path) -> ConnectionConfig:
    """Parse a YAML connection file and return a ConnectionConfig.

    The file holds a top-level ``connection`` mapping with any of the keys
    ``kubeconfig``, ``api_server_url`` and ``request_timeout``. Keys that are
    absent fall back to the environment variable defaults.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        ValueError: If the file content is malformed or has unknown keys.
    """
    if not path.exists():
        msg = (
            f"Connection configuration file not found: {path}. "
            f"Create it or unset {ENV_CONFIG_FILE} to configure from environment variables."
        )
        raise FileNotFoundError(msg)

    raw = yaml.safe_load(path.read_text())

    if not isinstance(raw, dict) or "connection" not in raw:
        msg = f"Connection config file {path} must contain a top-level 'connection' key."
        raise ValueError(msg)

    entry: Any = raw["connection"] or {}
    if not isinstance(entry, dict):
        msg = f"'connection' in {path} must be a mapping, got {type(entry).__name__}."
        raise ValueError(msg)

    unknown = sorted(set(entry) - set(_ALLOWED_KEYS))
    if unknown:
        msg = f"Connection config file {path} has unknown keys: {', '.join(unknown)}."
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    if entry.get("kubeconfig") is not None:
        kwargs["kubeconfig"] = os.path.expanduser(str(entry["kubeconfig"]))
    if entry.get("api_server_url") is not None:
        kwargs["api_server_url"] = str(entry["api_server_url"])
    if entry.get("request_timeout") is not None:
        kwargs["request_timeout"] = parse_duration(entry["request_timeout"])

    return ConnectionConfig(**kwargs)


def load_config() -> ConnectionConfig:
    """Load the connection config for this process.

    Reads the YAML file named by ``CLUSTER_CLIENTS_CONFIG`` when it is set,
    otherwise builds the config from environment variables alone.
    """
    config_file = os.environ.get(ENV_CONFIG_FILE)
    if config_file:
        return load_connection_config(Path(config_file))
    return ConnectionConfig()
