"""get_client_status: per-backend construction state of the registry."""

from __future__ import annotations

import asyncio

import structlog

from cluster_clients.errors import ClusterClientsError
from cluster_clients.models import RegistryStatus
from cluster_clients.registry import ClientRegistry
from cluster_clients.validation import validate_backend

log = structlog.get_logger()


async def get_client_status_handler(
    registry: ClientRegistry,
    backend: str = "all",
    connect: bool = False,
) -> RegistryStatus:
    """Core handler for get_client_status.

    With ``connect`` set, pending backends are constructed concurrently first;
    construction failures are reported in the status rather than raised.
    """
    if backend == "all":
        names = registry.backends
    else:
        validate_backend(backend, registry.backends)
        names = [backend]

    if connect:
        results = await asyncio.gather(
            *(asyncio.to_thread(registry.get_client, name) for name in names),
            return_exceptions=True,
        )
        for name, result in zip(names, results, strict=True):
            if isinstance(result, ClusterClientsError):
                log.warning("backend_unavailable", backend=name, error=str(result))
            elif isinstance(result, BaseException):
                raise result

    return registry.status(names)
