"""Lazy, thread-safe Kubernetes client registry with layered credential resolution."""

from cluster_clients.config import ConnectionConfig, load_config, load_connection_config
from cluster_clients.errors import ClientConstructionError, ClusterClientsError, ConfigError
from cluster_clients.registry import ClientRegistry
from cluster_clients.resolver import ResolvedConfig, resolve

__all__ = [
    "ClientConstructionError",
    "ClientRegistry",
    "ClusterClientsError",
    "ConfigError",
    "ConnectionConfig",
    "ResolvedConfig",
    "load_config",
    "load_connection_config",
    "resolve",
]
