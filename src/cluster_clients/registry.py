"""Lazy client registry: one client per backend, constructed on first use.

Each backend has its own slot guarded by its own lock. The first caller of a
slot runs the backend's factory; concurrent callers of the same slot block on
the lock until it finishes and then see the cached outcome. Slots never share
a lock, so a slow backend cannot hold up any other.

A failed construction is cached like a successful one: every later call for
that slot re-raises the same exception and the factory is never run again.
Recovering from a transient failure means building a new registry.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

import structlog
from kubernetes.dynamic import DynamicClient

from cluster_clients.clients.custom import (
    CustomResourceClient,
    new_gateway_client,
    new_istio_client,
    new_openshift_client,
)
from cluster_clients.clients.dynamic import new_dynamic_client
from cluster_clients.clients.kube import KubeClientSet, new_kube_client
from cluster_clients.config import ConnectionConfig
from cluster_clients.errors import ClientConstructionError, ClusterClientsError
from cluster_clients.models import BackendStatus, ClientError, RegistryStatus
from cluster_clients.validation import validate_backend

log = structlog.get_logger()

Factory = Callable[[ConnectionConfig], Any]

KUBE = "kube"
DYNAMIC = "dynamic"
GATEWAY = "gateway"
ISTIO = "istio"
OPENSHIFT = "openshift"

DEFAULT_FACTORIES: dict[str, Factory] = {
    KUBE: new_kube_client,
    DYNAMIC: new_dynamic_client,
    GATEWAY: new_gateway_client,
    ISTIO: new_istio_client,
    OPENSHIFT: new_openshift_client,
}


class _Slot:
    """Run-once latch with a memoized outcome for one backend."""

    __slots__ = ("name", "factory", "lock", "done", "value", "error")

    def __init__(self, name: str, factory: Factory) -> None:
        self.name = name
        self.factory = factory
        self.lock = threading.Lock()
        self.done = False
        self.value: Any = None
        self.error: ClusterClientsError | None = None


class ClientRegistry:
    """Holds one lazily constructed client per known backend.

    Args:
        config: Connection settings shared read-only by every backend factory.
        factories: Optional replacements for the default factory of any known
            backend, keyed by backend name.
    """

    def __init__(self, config: ConnectionConfig, factories: Mapping[str, Factory] | None = None) -> None:
        self._config = config
        merged = dict(DEFAULT_FACTORIES)
        for name, factory in (factories or {}).items():
            validate_backend(name, DEFAULT_FACTORIES)
            merged[name] = factory
        self._slots = {name: _Slot(name, factory) for name, factory in merged.items()}

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def backends(self) -> list[str]:
        return list(self._slots)

    def get_client(self, backend: str) -> Any:
        """Return the client for ``backend``, constructing it on first call.

        Raises:
            ValueError: If ``backend`` is not a known backend name.
            ConfigError: If credentials for the backend could not be resolved.
            ClientConstructionError: If the backend factory failed.
        """
        validate_backend(backend, self._slots)
        slot = self._slots[backend]
        if not slot.done:
            with slot.lock:
                if not slot.done:
                    self._construct(slot)
        if slot.error is not None:
            # Each raise would otherwise append to the shared instance's traceback.
            raise slot.error.with_traceback(None)
        return slot.value

    def _construct(self, slot: _Slot) -> None:
        # Outcome fields are written before ``done`` so the unlocked fast path
        # in get_client never sees a half-published slot.
        source = self._config.credential_source
        log.info("constructing_client", backend=slot.name, source=source)
        try:
            handle = slot.factory(self._config)
            if handle is None:
                raise ClientConstructionError(slot.name, source, "factory returned no client")
        except ClusterClientsError as e:
            log.error("client_construction_failed", backend=slot.name, source=e.source, error=str(e))
            slot.error = e
            slot.done = True
        except Exception as e:
            log.error("client_construction_failed", backend=slot.name, source=source, error=str(e))
            error = ClientConstructionError(slot.name, source, str(e) or type(e).__name__)
            error.__cause__ = e
            slot.error = error
            slot.done = True
        else:
            slot.value = handle
            slot.done = True
            log.info("client_constructed", backend=slot.name)

    def kube_client(self) -> KubeClientSet:
        """Primary Kubernetes client set."""
        return self.get_client(KUBE)

    def dynamic_client(self) -> DynamicClient:
        return self.get_client(DYNAMIC)

    def gateway_client(self) -> CustomResourceClient:
        return self.get_client(GATEWAY)

    def istio_client(self) -> CustomResourceClient:
        return self.get_client(ISTIO)

    def openshift_client(self) -> CustomResourceClient:
        return self.get_client(OPENSHIFT)

    def backend_status(self, backend: str) -> BackendStatus:
        """Report a slot's state without triggering construction."""
        validate_backend(backend, self._slots)
        slot = self._slots[backend]
        if not slot.done:
            state = "constructing" if slot.lock.locked() else "pending"
            return BackendStatus(backend=backend, state=state)
        if slot.error is not None:
            return BackendStatus(
                backend=backend,
                state="failed",
                error=ClientError(
                    error=str(slot.error),
                    kind=slot.error.kind,
                    backend=backend,
                    source=slot.error.source,
                ),
            )
        return BackendStatus(backend=backend, state="ready")

    def status(self, backends: list[str] | None = None) -> RegistryStatus:
        """Report the state of every slot, or of ``backends`` only."""
        names = backends if backends is not None else self.backends
        statuses = [self.backend_status(name) for name in names]
        ready = sum(1 for s in statuses if s.state == "ready")
        failed = sum(1 for s in statuses if s.state == "failed")
        summary = f"{ready} of {len(statuses)} backends ready"
        if failed:
            summary += f", {failed} failed"
        return RegistryStatus(
            kubeconfig=self._config.credential_source,
            api_server_url=self._config.api_server_url or None,
            request_timeout_seconds=self._config.request_timeout if self._config.has_timeout else None,
            backends=statuses,
            summary=summary,
            timestamp=datetime.now(tz=UTC).isoformat(),
        )
