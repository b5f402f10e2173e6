"""get_cluster_version: API server version through the primary client."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import structlog

from cluster_clients.errors import ClusterClientsError
from cluster_clients.models import ClientError, ClusterVersionOutput
from cluster_clients.registry import KUBE, ClientRegistry

log = structlog.get_logger()


async def get_cluster_version_handler(registry: ClientRegistry) -> ClusterVersionOutput:
    """Core handler for get_cluster_version."""
    try:
        kube = await asyncio.to_thread(registry.kube_client)
    except ClusterClientsError as e:
        return ClusterVersionOutput(
            summary="Primary Kubernetes client unavailable",
            timestamp=datetime.now(tz=UTC).isoformat(),
            errors=[
                ClientError(
                    error=str(e),
                    kind=e.kind,
                    backend=KUBE,
                    source=e.source,
                )
            ],
        )

    try:
        info = await asyncio.to_thread(kube.version.get_code)
    except Exception as e:
        log.error("failed_to_get_version", host=kube.host)
        return ClusterVersionOutput(
            host=kube.host,
            summary=f"Failed to query version from {kube.host}",
            timestamp=datetime.now(tz=UTC).isoformat(),
            errors=[ClientError(error=str(e), kind="request", backend=KUBE, source="version-api")],
        )

    return ClusterVersionOutput(
        host=kube.host,
        git_version=info.git_version,
        platform=info.platform,
        summary=f"{kube.host} running {info.git_version}",
        timestamp=datetime.now(tz=UTC).isoformat(),
    )
