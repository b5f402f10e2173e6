"""Credential resolution for Kubernetes API clients.

Resolution order, first match wins:

1. An empty kubeconfig path falls back to ``~/.kube/config`` when that file exists.
2. A path that is still empty means the process runs inside the cluster, so the
   service-account token and CA mounted into the pod are used.
3. Otherwise the kubeconfig file is loaded and ``api_server_url``, when set,
   replaces the server address recorded in it.

Every configuration is loaded into a private ``Configuration`` object; the
kubernetes SDK's process-wide default configuration is never touched.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
from kubernetes import client as k8s_client
from kubernetes.config import load_incluster_config, load_kube_config

from cluster_clients.errors import ConfigError
from cluster_clients.transport import InstrumentedTransport

log = structlog.get_logger()

IN_CLUSTER_SOURCE = "in-cluster"


def default_kubeconfig_path() -> Path:
    """Return the well-known kubeconfig location in the user's home directory."""
    return Path.home() / ".kube" / "config"


def load_configuration(kubeconfig: str, api_server_url: str) -> tuple[k8s_client.Configuration, str]:
    """Load an uninstrumented client configuration.

    Returns the configuration and the source it was loaded from: the kubeconfig
    path, or ``"in-cluster"``.

    Raises:
        ConfigError: If the selected source cannot be read or parsed.
    """
    if not kubeconfig:
        default = default_kubeconfig_path()
        if default.is_file():
            kubeconfig = str(default)
    log.debug("resolving_credentials", kubeconfig=kubeconfig, api_server_url=api_server_url)

    configuration = k8s_client.Configuration()
    if not kubeconfig:
        log.info("using_in_cluster_config")
        if api_server_url:
            log.warning("api_server_url_ignored_in_cluster", api_server_url=api_server_url)
        try:
            load_incluster_config(client_configuration=configuration)
        except Exception as e:
            log.error("failed_to_load_config", source=IN_CLUSTER_SOURCE, error=str(e))
            raise ConfigError(IN_CLUSTER_SOURCE, str(e)) from e
        return configuration, IN_CLUSTER_SOURCE

    log.info("using_kubeconfig", kubeconfig=kubeconfig)
    try:
        load_kube_config(config_file=kubeconfig, client_configuration=configuration, persist_config=False)
    except Exception as e:
        log.error("failed_to_load_config", source=kubeconfig, error=str(e))
        raise ConfigError(kubeconfig, str(e)) from e
    if api_server_url:
        configuration.host = api_server_url
    return configuration, kubeconfig


@dataclass(frozen=True)
class ResolvedConfig:
    """A resolved configuration plus the instrumentation applied to its transport.

    ``timeout`` is ``None`` when no deadline is enforced. The wrapped
    ``configuration`` is never handed out directly; callers get copies.
    """

    configuration: k8s_client.Configuration
    source: str
    timeout: float | None = None

    @property
    def host(self) -> str:
        return self.configuration.host

    @property
    def in_cluster(self) -> bool:
        return self.source == IN_CLUSTER_SOURCE

    def new_configuration(self) -> k8s_client.Configuration:
        return copy.deepcopy(self.configuration)

    def wrap_transport(self, transport: Any) -> InstrumentedTransport:
        return InstrumentedTransport(transport, timeout=self.timeout)

    def new_api_client(self) -> k8s_client.ApiClient:
        """Build an ApiClient on a private copy of the configuration with an instrumented transport."""
        api_client = k8s_client.ApiClient(configuration=self.new_configuration())
        api_client.rest_client = self.wrap_transport(api_client.rest_client)
        return api_client


def resolve(kubeconfig: str = "", api_server_url: str = "", request_timeout: float = 0.0) -> ResolvedConfig:
    """Resolve credentials and attach request instrumentation and the request timeout.

    A ``request_timeout`` of zero or less yields ``timeout=None``: no deadline.

    Raises:
        ConfigError: If the selected credential source cannot be loaded.
    """
    configuration, source = load_configuration(kubeconfig, api_server_url)
    timeout = request_timeout if request_timeout > 0 else None
    return ResolvedConfig(configuration=configuration, source=source, timeout=timeout)
