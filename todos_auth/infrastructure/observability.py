# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from flask import Flask, Response, g, request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUEST_LATENCY = Histogram(
    "todos_auth_request_latency_seconds",
    "Request latency",
    labelnames=("endpoint",),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_COUNTER = Counter(
    "todos_auth_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "method", "status"),
)
AUTH_FAILURES = Counter(
    "todos_auth_authentication_failures_total",
    "Rejected authentication attempts",
    labelnames=("scheme",),
)


def _endpoint_label() -> str:
    # Route template, never the concrete path, to keep label cardinality bounded.
    if request.url_rule is not None:
        return request.url_rule.rule
    return "<unmatched>"


def configure_metrics(app: Flask, *, enabled: bool = True) -> None:
    if not enabled:
        return

    @app.before_request
    def _start_metrics_timer() -> None:
        g._metrics_t0 = time.perf_counter()

    @app.after_request
    def _record_metrics(response: Response) -> Response:
        start = getattr(g, "_metrics_t0", None)
        endpoint = _endpoint_label()
        if start is not None:
            REQUEST_LATENCY.labels(endpoint=endpoint).observe(time.perf_counter() - start)
        REQUEST_COUNTER.labels(
            endpoint=endpoint, method=request.method, status=str(response.status_code)
        ).inc()
        return response


def metrics_response() -> Response:
    return Response(generate_latest(), content_type=CONTENT_TYPE_LATEST)


__all__ = [
    "AUTH_FAILURES",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "configure_metrics",
    "metrics_response",
]
