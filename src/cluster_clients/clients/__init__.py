"""Backend factories for the client registry.

Every factory takes the registry's shared ``ConnectionConfig`` and returns a
ready client handle, or raises.
"""

from __future__ import annotations

import structlog
from kubernetes import client as k8s_client

from cluster_clients.config import ConnectionConfig
from cluster_clients.resolver import resolve

log = structlog.get_logger()


def new_api_client(config: ConnectionConfig) -> k8s_client.ApiClient:
    """Create an isolated, instrumented ApiClient for the given connection settings.

    Each call resolves credentials afresh and returns a client with its own
    configuration copy, so wrapping one backend's transport cannot affect another.
    """
    resolved = resolve(config.kubeconfig, config.api_server_url, config.request_timeout)
    api_client = resolved.new_api_client()
    log.debug("created_api_client", host=resolved.host, source=resolved.source, timeout=resolved.timeout)
    return api_client
