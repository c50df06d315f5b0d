"""
Prometheus metrics definitions and FastAPI instrumentation.

Defines request metrics, hashing operation metrics and a ``setup_metrics``
function that wires request tracking and the ``/metrics`` endpoint into a
FastAPI application.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response as StarletteResponse

# ======================================================================
# Custom metrics (module-level singletons)
# ======================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "endpoint", "status"],
    registry=REGISTRY,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "Request latency in seconds",
    labelnames=["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=REGISTRY,
)

hash_operations_total = Counter(
    "hash_operations_total",
    "Hash, verify and rehash-check operations by outcome",
    labelnames=["algorithm", "operation", "outcome"],
    registry=REGISTRY,
)

hash_operation_duration_seconds = Histogram(
    "hash_operation_duration_seconds",
    "Wall-clock time spent inside the hashing engines",
    labelnames=["algorithm", "operation"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=REGISTRY,
)


@contextmanager
def observe_operation(algorithm: str, operation: str) -> Iterator[dict[str, str]]:
    """
    Time a hashing operation and count it by outcome.

    The yielded dict holds the ``outcome`` label (``ok`` by default); callers
    may overwrite it, e.g. with ``mismatch``.  Exceptions count as ``error``.
    """
    labels = {"outcome": "ok"}
    start = time.perf_counter()
    try:
        yield labels
    except Exception:
        labels["outcome"] = "error"
        raise
    finally:
        hash_operation_duration_seconds.labels(
            algorithm=algorithm, operation=operation
        ).observe(time.perf_counter() - start)
        hash_operations_total.labels(
            algorithm=algorithm, operation=operation, outcome=labels["outcome"]
        ).inc()


# ======================================================================
# Middleware for automatic request instrumentation
# ======================================================================


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware that records request count and latency per endpoint."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        duration = time.perf_counter() - start

        endpoint = self._get_path_template(request)
        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status=str(response.status_code),
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)

        return response

    @staticmethod
    def _get_path_template(request: Request) -> str:
        """
        Resolve the route template (e.g. ``/argon2/hash``) so that
        cardinality stays bounded; unmatched paths collapse to one label.
        """
        route = request.scope.get("route")
        if route and hasattr(route, "path"):
            return route.path
        return "unmatched"


# ======================================================================
# Setup helper
# ======================================================================


def setup_metrics(app: FastAPI) -> None:
    """
    Instrument a FastAPI application with Prometheus metrics.

    * Adds the ``PrometheusMiddleware`` for automatic request tracking.
    * Registers a ``/metrics`` endpoint that serves the Prometheus
      exposition format.
    """

    app.add_middleware(PrometheusMiddleware)

    @app.get("/metrics", include_in_schema=False)
    async def metrics_endpoint() -> StarletteResponse:
        return StarletteResponse(
            content=generate_latest(REGISTRY),
            media_type=CONTENT_TYPE_LATEST,
        )
