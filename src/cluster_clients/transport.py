"""Request instrumentation for the Kubernetes REST transport."""

from __future__ import annotations

import time
from typing import Any
from urllib.parse import urlsplit

import structlog
from kubernetes.client.exceptions import ApiException
from prometheus_client import Counter, Histogram

log = structlog.get_logger()

REQUEST_COUNT = Counter(
    "cluster_clients_http_requests",
    "Requests sent to Kubernetes API servers.",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "cluster_clients_http_request_duration_seconds",
    "Latency of requests sent to Kubernetes API servers.",
    ["method", "path"],
)


def last_path_segment(url: str) -> str:
    """Reduce a request URL to the last segment of its path.

    Keeps metric label cardinality bounded: ``/api/v1/namespaces/x/pods``
    becomes ``pods`` whatever namespace was queried.
    """
    return urlsplit(url).path.split("/")[-1]


class InstrumentedTransport:
    """Wraps a ``RESTClientObject`` and records every request it sends.

    Requests, responses and raised exceptions pass through unchanged. The only
    request-level change is the default ``_request_timeout`` applied when the
    caller did not set one.
    """

    def __init__(self, transport: Any, timeout: float | None = None) -> None:
        self._transport = transport
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def request(self, method: str, url: str, *args: Any, **kwargs: Any) -> Any:
        # The wrapped signature differs between SDK releases, so arguments are
        # forwarded untouched apart from the default timeout.
        if self._timeout is not None and not args and kwargs.get("_request_timeout") is None:
            kwargs["_request_timeout"] = self._timeout

        path = last_path_segment(url)
        status = "error"
        start = time.monotonic()
        try:
            response = self._transport.request(method, url, *args, **kwargs)
            status = str(response.status)
            return response
        except ApiException as e:
            status = str(e.status)
            raise
        finally:
            elapsed = time.monotonic() - start
            REQUEST_COUNT.labels(method=method, path=path, status=status).inc()
            REQUEST_LATENCY.labels(method=method, path=path).observe(elapsed)
            log.debug(
                "request_completed",
                method=method,
                path=path,
                status=status,
                latency_ms=int(elapsed * 1000),
            )

    # Older ApiClient releases dispatch through the verb helpers, so each one
    # must route back into the instrumented request().
    def GET(self, url: str, **kwargs: Any) -> Any:  # noqa: N802
        return self.request("GET", url, **kwargs)

    def HEAD(self, url: str, **kwargs: Any) -> Any:  # noqa: N802
        return self.request("HEAD", url, **kwargs)

    def OPTIONS(self, url: str, **kwargs: Any) -> Any:  # noqa: N802
        return self.request("OPTIONS", url, **kwargs)

    def DELETE(self, url: str, **kwargs: Any) -> Any:  # noqa: N802
        return self.request("DELETE", url, **kwargs)

    def POST(self, url: str, **kwargs: Any) -> Any:  # noqa: N802
        return self.request("POST", url, **kwargs)

    def PUT(self, url: str, **kwargs: Any) -> Any:  # noqa: N802
        return self.request("PUT", url, **kwargs)

    def PATCH(self, url: str, **kwargs: Any) -> Any:  # noqa: N802
        return self.request("PATCH", url, **kwargs)

    def __getattr__(self, name: str) -> Any:
        if name == "_transport":
            raise AttributeError(name)
        return getattr(self._transport, name)
