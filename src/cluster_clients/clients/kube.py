"""Primary Kubernetes client: the typed API groups bound to one ApiClient."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from kubernetes import client as k8s_client

from cluster_clients.clients import new_api_client
from cluster_clients.config import ConnectionConfig

log = structlog.get_logger()


@dataclass(frozen=True)
class KubeClientSet:
    """Typed Kubernetes APIs sharing a single instrumented ApiClient."""

    api_client: k8s_client.ApiClient
    core: k8s_client.CoreV1Api
    apps: k8s_client.AppsV1Api
    networking: k8s_client.NetworkingV1Api
    discovery: k8s_client.DiscoveryV1Api
    custom_objects: k8s_client.CustomObjectsApi
    version: k8s_client.VersionApi

    @property
    def host(self) -> str:
        return self.api_client.configuration.host


def new_kube_client(config: ConnectionConfig) -> KubeClientSet:
    """Build the primary Kubernetes client set."""
    log.info("instantiating_kube_client")
    api_client = new_api_client(config)
    client_set = KubeClientSet(
        api_client=api_client,
        core=k8s_client.CoreV1Api(api_client),
        apps=k8s_client.AppsV1Api(api_client),
        networking=k8s_client.NetworkingV1Api(api_client),
        discovery=k8s_client.DiscoveryV1Api(api_client),
        custom_objects=k8s_client.CustomObjectsApi(api_client),
        version=k8s_client.VersionApi(api_client),
    )
    log.info("created_kube_client", host=client_set.host)
    return client_set
