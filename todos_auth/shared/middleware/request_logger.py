# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import re
import secrets
import time
from typing import Any

from flask import Flask, Response, g, request

from todos_auth.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9_\-\.]{1,64}$")
CREDENTIAL_HEADERS = frozenset({"authorization", "cookie", "set-cookie"})
CREDENTIAL_PARAMS = ("password", "token", "secret", "session")


def _get_client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return request.remote_addr or "unknown"


def _get_user_id() -> int | None:
    user = getattr(g, "user", None)
    return user.id if user is not None else None


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers() -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in CREDENTIAL_HEADERS else value
        for key, value in request.headers.items()
    }


def _safe_query() -> dict[str, Any]:
    return {
        key: "<redacted>" if any(part in key.lower() for part in CREDENTIAL_PARAMS) else value
        for key, value in request.args.items()
    }


def _incoming_request_id() -> str:
    value = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if value and _REQUEST_ID_RE.match(value):
        return value
    return secrets.token_urlsafe(8)


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """Bind a correlation id to every request and log its start and end."""

    @app.before_request
    def _before_request() -> None:
        g.correlation_id = _incoming_request_id()
        set_correlation_id(g.correlation_id)
        g.request_start_time = time.perf_counter()

        line = f"http.request: {request.method} {request.path} from {_get_client_ip()}"
        if debug_mode:
            line += (
                f" query={_safe_query()} headers={_safe_headers()}"
                f" body_size={len(request.get_data(cache=True))}"
            )
        logger.info(line)

    @app.after_request
    def _after_request(response: Response) -> Response:
        started = getattr(g, "request_start_time", None)
        elapsed = time.perf_counter() - started if started is not None else 0.0
        line = (
            f"http.response: {request.method} {request.path} "
            f"status={response.status_code} duration={elapsed:.3f}s"
        )
        if debug_mode:
            line += f" user={_get_user_id()}"
        logger.info(line)

        correlation_id = getattr(g, "correlation_id", None)
        if correlation_id:
            response.headers.setdefault(REQUEST_ID_HEADER, correlation_id)
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            message = (
                f"http.error: {type(exc).__name__} on {request.method} {request.path} "
                f"user={_get_user_id()}"
            )
            if debug_mode:
                logger.opt(exception=exc).error(message)
            else:
                logger.error(message)
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
