# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from todos_auth.shared.errors.base import AuthenticationError, ValidationError


class EmailAlreadyRegisteredError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            code="email_already_registered",
            status=HTTPStatus.CONFLICT,
            context={"fields": ["email"]},
        )


class InvalidCredentialsError(AuthenticationError):
    pass


class SessionNotFoundError(AuthenticationError):
    """Token is unknown, expired or malformed."""
