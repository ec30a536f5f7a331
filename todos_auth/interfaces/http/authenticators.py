# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request authenticators.

Each authenticator wraps a view function. It either resolves the caller to
a ``User`` and stores it on ``flask.g.user`` before calling the view, or
short-circuits with ``AuthenticationError`` (401). Views read the caller
through :func:`current_user` and never care which scheme admitted it.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from flask import g, request

from todos_auth.application.use_cases.users.authenticate_session import (
    AuthenticateSessionUseCase,
)
from todos_auth.application.use_cases.users.authenticate_user import (
    AuthenticateUserUseCase,
)
from todos_auth.domain.users.entities import User
from todos_auth.infrastructure.audit import AuditAction, audit_log
from todos_auth.infrastructure.observability import AUTH_FAILURES
from todos_auth.shared.errors import AuthenticationError
from todos_auth.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


def current_user() -> User:
    user = getattr(g, "user", None)
    if user is None:
        raise AuthenticationError()
    return cast(User, user)


def current_session_token() -> str:
    token = getattr(g, "session_token", None)
    if not token:
        raise AuthenticationError()
    return cast(str, token)


class BasicAuthenticator:
    """``Authorization: Basic`` email/password check for a single request."""

    scheme = "basic"

    def __init__(self, *, authenticate_user: AuthenticateUserUseCase) -> None:
        self._authenticate_user = authenticate_user

    def __call__(self, view: F) -> F:
        @wraps(view)
        def wrapper(*args, **kwargs):
            credentials = request.authorization
            if (
                credentials is None
                or credentials.type != "basic"
                or not credentials.username
                or credentials.password is None
            ):
                AUTH_FAILURES.labels(scheme=self.scheme).inc()
                logger.debug(f"auth.basic: missing credentials on {request.method} {request.path}")
                raise AuthenticationError()

            try:
                user = self._authenticate_user.execute(
                    credentials.username, credentials.password
                )
            except AuthenticationError:
                AUTH_FAILURES.labels(scheme=self.scheme).inc()
                audit_log(AuditAction.LOGIN_FAILED, ip_address=request.remote_addr, success=False)
                raise

            g.user = user
            logger.debug(f"auth.basic: ok user={user.id}")
            return view(*args, **kwargs)

        return cast(F, wrapper)


class SessionAuthenticator:
    """Session cookie check run on every protected request."""

    scheme = "session"

    def __init__(
        self,
        *,
        authenticate_session: AuthenticateSessionUseCase,
        cookie_name: str,
    ) -> None:
        self._authenticate_session = authenticate_session
        self._cookie_name = cookie_name

    def __call__(self, view: F) -> F:
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = request.cookies.get(self._cookie_name)
            try:
                user = self._authenticate_session.execute(token)
            except AuthenticationError:
                AUTH_FAILURES.labels(scheme=self.scheme).inc()
                raise

            g.user = user
            g.session_token = token
            logger.debug(f"auth.session: ok user={user.id} {request.method} {request.path}")
            return view(*args, **kwargs)

        return cast(F, wrapper)


__all__ = [
    "BasicAuthenticator",
    "SessionAuthenticator",
    "current_session_token",
    "current_user",
]
