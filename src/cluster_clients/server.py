"""MCP server entry point and tool registration."""

from __future__ import annotations

import sys
import time

import structlog
from mcp.server.fastmcp import FastMCP

from cluster_clients.config import load_config
from cluster_clients.models import scrub_sensitive_values
from cluster_clients.registry import ClientRegistry
from cluster_clients.tools.client_status import get_client_status_handler
from cluster_clients.tools.cluster_version import get_cluster_version_handler

# Configure structlog for JSON output to stderr
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
    ],
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)

log = structlog.get_logger()

SERVER_NAME = "Cluster Clients MCP Server"


class ClusterClientTools:
    """MCP tools bound to one explicitly constructed ClientRegistry."""

    def __init__(self, registry: ClientRegistry) -> None:
        self._registry = registry

    async def get_client_status(self, backend: str = "all", connect: bool = False) -> str:
        """Report construction state of the Kubernetes API clients.

        Returns each backend's state (pending/constructing/ready/failed) and, for
        failed backends, the error with the credential source that was tried.
        Use this when diagnosing kubeconfig, in-cluster credential or endpoint problems.

        Args:
            backend: One of 'kube', 'dynamic', 'gateway', 'istio', 'openshift', or 'all'.
            connect: Construct pending backends before reporting. Default false.
        """
        start = time.monotonic()
        try:
            result = await get_client_status_handler(self._registry, backend, connect)
            output = scrub_sensitive_values(result.model_dump_json(indent=2))
            log.info("tool_completed", tool="get_client_status", backend=backend, latency_ms=_elapsed_ms(start))
            return output
        except Exception as e:
            sanitised = scrub_sensitive_values(str(e))
            log.error("tool_failed", tool="get_client_status", backend=backend, error=sanitised)
            raise RuntimeError(sanitised) from None

    async def get_cluster_version(self) -> str:
        """Get the Kubernetes version reported by the API server.

        Constructs the primary client if needed, then queries the version endpoint.
        Use this to verify that credentials and the endpoint override reach a live cluster.
        """
        start = time.monotonic()
        try:
            result = await get_cluster_version_handler(self._registry)
            output = scrub_sensitive_values(result.model_dump_json(indent=2))
            log.info("tool_completed", tool="get_cluster_version", latency_ms=_elapsed_ms(start))
            return output
        except Exception as e:
            sanitised = scrub_sensitive_values(str(e))
            log.error("tool_failed", tool="get_cluster_version", error=sanitised)
            raise RuntimeError(sanitised) from None


def build_server(registry: ClientRegistry) -> FastMCP:
    """Create a FastMCP server whose tools share ``registry``."""
    server = FastMCP(SERVER_NAME)
    tools = ClusterClientTools(registry)
    server.add_tool(tools.get_client_status)
    server.add_tool(tools.get_cluster_version)
    return server


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def main() -> None:
    registry = ClientRegistry(load_config())
    build_server(registry).run(transport="stdio")


if __name__ == "__main__":
    main()
