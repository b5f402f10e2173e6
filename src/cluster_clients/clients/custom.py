"""Extension API clients: Gateway API, Istio and OpenShift routes.

These API groups are served through CRDs, so the generated typed classes have
no knowledge of them and ``CustomObjectsApi`` is used with a fixed group and
version per backend.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from kubernetes import client as k8s_client

from cluster_clients.clients import new_api_client
from cluster_clients.config import ConnectionConfig
from cluster_clients.resolver import load_configuration

log = structlog.get_logger()

GATEWAY_GROUP = "gateway.networking.k8s.io"
GATEWAY_VERSION = "v1"

ISTIO_GROUP = "networking.istio.io"
ISTIO_VERSION = "v1"

OPENSHIFT_ROUTE_GROUP = "route.openshift.io"
OPENSHIFT_ROUTE_VERSION = "v1"


class CustomResourceClient:
    """Wrapper around CustomObjectsApi bound to one API group and version."""

    def __init__(self, api_client: k8s_client.ApiClient, group: str, version: str) -> None:
        self.api_client = api_client
        self.group = group
        self.version = version
        self._api = k8s_client.CustomObjectsApi(api_client)

    @property
    def host(self) -> str:
        return self.api_client.configuration.host

    async def list_objects(self, plural: str, namespace: str | None = None) -> list[dict[str, Any]]:
        """List custom objects of one kind.

        Args:
            plural: Plural resource name, e.g. 'httproutes'.
            namespace: Filter to a specific namespace. None for all namespaces.
        """
        try:
            if namespace:
                result = await asyncio.to_thread(
                    self._api.list_namespaced_custom_object,
                    group=self.group,
                    version=self.version,
                    namespace=namespace,
                    plural=plural,
                )
            else:
                result = await asyncio.to_thread(
                    self._api.list_cluster_custom_object,
                    group=self.group,
                    version=self.version,
                    plural=plural,
                )
        except Exception:
            log.error(
                "failed_to_list_custom_objects",
                group=self.group,
                version=self.version,
                plural=plural,
                namespace=namespace,
            )
            raise
        return list(result.get("items", []))

    async def get_object(self, plural: str, name: str, namespace: str) -> dict[str, Any]:
        """Fetch a single namespaced custom object."""
        try:
            return await asyncio.to_thread(
                self._api.get_namespaced_custom_object,
                group=self.group,
                version=self.version,
                namespace=namespace,
                plural=plural,
                name=name,
            )
        except Exception:
            log.error(
                "failed_to_get_custom_object",
                group=self.group,
                plural=plural,
                name=name,
                namespace=namespace,
            )
            raise


def new_gateway_client(config: ConnectionConfig) -> CustomResourceClient:
    """Build a Gateway API client on an instrumented ApiClient."""
    client = CustomResourceClient(new_api_client(config), GATEWAY_GROUP, GATEWAY_VERSION)
    log.info("created_gateway_client", host=client.host)
    return client


def new_openshift_client(config: ConnectionConfig) -> CustomResourceClient:
    """Build an OpenShift route client on an instrumented ApiClient."""
    client = CustomResourceClient(new_api_client(config), OPENSHIFT_ROUTE_GROUP, OPENSHIFT_ROUTE_VERSION)
    log.info("created_openshift_client", host=client.host)
    return client


def new_istio_client(config: ConnectionConfig) -> CustomResourceClient:
    """Build an Istio networking client straight from the credential source.

    Istio clients are built from the raw kubeconfig path and endpoint override
    rather than a resolved configuration, so no request instrumentation or
    timeout is attached.
    """
    configuration, _ = load_configuration(config.kubeconfig, config.api_server_url)
    api_client = k8s_client.ApiClient(configuration=configuration)
    client = CustomResourceClient(api_client, ISTIO_GROUP, ISTIO_VERSION)
    log.info("created_istio_client", host=client.host)
    return client
