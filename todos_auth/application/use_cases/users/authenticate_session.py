# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case resolving a session token to its user."""

from __future__ import annotations

import re

from todos_auth.domain.users.entities import User
from todos_auth.domain.users.exceptions import SessionNotFoundError
from todos_auth.domain.users.repositories import SessionRepository, UserRepository

_TOKEN_RE = re.compile(r"^[A-Za-z0-9_\-]{16,128}$")


def is_well_formed_token(token: str | None) -> bool:
    return bool(token) and _TOKEN_RE.match(token) is not None


class AuthenticateSessionUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
    ) -> None:
        self._users = users
        self._sessions = sessions

    def execute(self, token: str | None) -> User:
        if not is_well_formed_token(token):
            raise SessionNotFoundError()

        user_id = self._sessions.validate(token)
        user = self._users.find_by_id(user_id)
        if user is None:
            raise SessionNotFoundError()
        return user
