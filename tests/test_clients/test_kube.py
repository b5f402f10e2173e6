"""Tests for the primary Kubernetes client factory."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from kubernetes import client as k8s_client

from cluster_clients.clients import new_api_client
from cluster_clients.clients.kube import KubeClientSet, new_kube_client
from cluster_clients.config import ConnectionConfig
from cluster_clients.transport import InstrumentedTransport


class TestNewApiClient:
    def test_each_call_resolves_afresh(self, connection_config: ConnectionConfig) -> None:
        first = new_api_client(connection_config)
        second = new_api_client(connection_config)
        assert first is not second
        assert first.configuration is not second.configuration

    def test_instrumented_with_timeout(self, connection_config: ConnectionConfig) -> None:
        api_client = new_api_client(connection_config)
        assert isinstance(api_client.rest_client, InstrumentedTransport)
        assert api_client.rest_client.timeout == 30


class TestNewKubeClient:
    def test_typed_apis_share_one_api_client(self, connection_config: ConnectionConfig) -> None:
        client_set = new_kube_client(connection_config)
        assert isinstance(client_set, KubeClientSet)
        assert isinstance(client_set.core, k8s_client.CoreV1Api)
        assert isinstance(client_set.apps, k8s_client.AppsV1Api)
        assert isinstance(client_set.networking, k8s_client.NetworkingV1Api)
        assert isinstance(client_set.discovery, k8s_client.DiscoveryV1Api)
        assert isinstance(client_set.custom_objects, k8s_client.CustomObjectsApi)
        assert isinstance(client_set.version, k8s_client.VersionApi)
        for api in (client_set.core, client_set.apps, client_set.version):
            assert api.api_client is client_set.api_client

    def test_host_from_kubeconfig(self, connection_config: ConnectionConfig) -> None:
        assert new_kube_client(connection_config).host == "https://kube.example.test:6443"

    def test_uses_resolved_api_client(self, connection_config: ConnectionConfig, mock_api_client: MagicMock) -> None:
        with patch("cluster_clients.clients.kube.new_api_client", return_value=mock_api_client) as mock_new:
            client_set = new_kube_client(connection_config)
        mock_new.assert_called_once_with(connection_config)
        assert client_set.api_client is mock_api_client
        assert client_set.host == "https://kube.example.test:6443"
