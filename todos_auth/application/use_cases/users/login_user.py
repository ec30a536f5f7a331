# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta

from todos_auth.domain.users.entities import Session, User
from todos_auth.domain.users.repositories import SessionRepository

DEFAULT_SESSION_TTL = timedelta(hours=1)


class LoginUserUseCase:
    def __init__(
        self,
        *,
        sessions: SessionRepository,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
    ) -> None:
        self._sessions = sessions
        self._session_ttl = session_ttl

    @property
    def session_ttl(self) -> timedelta:
        return self._session_ttl

    def execute(self, user: User) -> Session:
        return self._sessions.save(user.id, self._session_ttl)
