"""Dynamic Kubernetes client for resources discovered at runtime."""

from __future__ import annotations

import structlog
from kubernetes.dynamic import DynamicClient

from cluster_clients.clients import new_api_client
from cluster_clients.config import ConnectionConfig

log = structlog.get_logger()


def new_dynamic_client(config: ConnectionConfig) -> DynamicClient:
    """Build a DynamicClient on an instrumented ApiClient.

    DynamicClient runs API discovery in its constructor, so an unreachable
    API server fails here rather than on first use.
    """
    api_client = new_api_client(config)
    client = DynamicClient(api_client)
    log.info("created_dynamic_client", host=api_client.configuration.host)
    return client
