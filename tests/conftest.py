"""Shared test fixtures for all test modules."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from cluster_clients.config import ENV_API_SERVER_URL, ENV_CONFIG_FILE, ENV_KUBECONFIG, ENV_REQUEST_TIMEOUT

KUBECONFIG_SERVER = "https://kube.example.test:6443"
KUBECONFIG_TOKEN = "test-token-abc123"

_KUBECONFIG_TEMPLATE = """\
apiVersion: v1
kind: Config
clusters:
- name: test
  cluster:
    server: {server}
    insecure-skip-tls-verify: true
contexts:
- name: test
  context:
    cluster: test
    user: test
current-context: test
users:
- name: test
  user:
    token: {token}
"""


def write_kubeconfig(path: Path, server: str = KUBECONFIG_SERVER, token: str = KUBECONFIG_TOKEN) -> Path:
    """Write a minimal token-auth kubeconfig to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_KUBECONFIG_TEMPLATE.format(server=server, token=token))
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own CLUSTER_CLIENTS_* settings out of tests."""
    for name in (ENV_CONFIG_FILE, ENV_KUBECONFIG, ENV_API_SERVER_URL, ENV_REQUEST_TIMEOUT):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty home directory, so no ~/.kube/config exists unless a test writes one."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def kubeconfig_file(tmp_path: Path) -> Path:
    """An explicit kubeconfig file outside the home directory."""
    return write_kubeconfig(tmp_path / "cfg" / "kubeconfig")


@pytest.fixture
def make_kubeconfig() -> Callable[..., Path]:
    """Factory fixture for tests that need several kubeconfig files."""
    return write_kubeconfig
