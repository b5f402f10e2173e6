"""Client-specific test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from cluster_clients.config import ConnectionConfig


@pytest.fixture
def connection_config(kubeconfig_file: Path) -> ConnectionConfig:
    """Connection settings pointing at the test kubeconfig, with a 30s timeout."""
    return ConnectionConfig(kubeconfig=str(kubeconfig_file), api_server_url="", request_timeout=30)


@pytest.fixture
def mock_api_client() -> MagicMock:
    """A stand-in ApiClient with a known host."""
    api_client = MagicMock()
    api_client.configuration.host = "https://kube.example.test:6443"
    return api_client
