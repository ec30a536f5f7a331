# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from todos_auth.domain.users.entities import Session as DomainSession
from todos_auth.domain.users.entities import User as DomainUser
from todos_auth.domain.users.entities import as_utc
from todos_auth.domain.users.exceptions import (
    EmailAlreadyRegisteredError,
    SessionNotFoundError,
)
from todos_auth.domain.users.repositories import SessionRepository, UserRepository
from todos_auth.infrastructure.db.models import SessionToken, User
from todos_auth.infrastructure.unit_of_work import unit_of_work_scope
from todos_auth.shared.logging import logger

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(User).filter(User.email == email).first()
            if not row:
                return None
            return _to_domain(row)

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if not row:
                return None
            return _to_domain(row)

    def add(self, user: DomainUser) -> DomainUser:
        with unit_of_work_scope(self._session_factory) as session:
            row = User(
                name=user.name,
                email=user.email,
                password_hash=user.password_hash,
                created_at=user.created_at,
            )
            session.add(row)
            try:
                session.flush()
            except IntegrityError as exc:
                # unique(email) lost a race with a concurrent create
                raise EmailAlreadyRegisteredError() from exc
            session.refresh(row)
            return _to_domain(row)


class SqlAlchemySessionRepository(SessionRepository):
    """Session store keyed by token; expiry is the only liveness signal."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        clock: Clock = utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def save(self, user_id: int, ttl: timedelta) -> DomainSession:
        now = self._clock()
        token_value = secrets.token_urlsafe(32)
        expires_at = now + ttl
        with unit_of_work_scope(self._session_factory) as session:
            session.add(
                SessionToken(
                    user_id=user_id,
                    token=token_value,
                    expires_at=expires_at,
                    created_at=now,
                )
            )
        logger.debug(f"sessions.save: user_id={user_id} expires_at={expires_at.isoformat()}")
        return DomainSession(token=token_value, user_id=user_id, expires_at=expires_at)

    def validate(self, token: str) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(SessionToken)
                .filter(
                    SessionToken.token == token,
                    SessionToken.expires_at > self._clock(),
                )
                .first()
            )
            if not row:
                raise SessionNotFoundError()
            return row.user_id

    def set_expiry(self, token: str, ttl: timedelta) -> None:
        now = self._clock()
        with unit_of_work_scope(self._session_factory) as session:
            # Expired sessions stay expired.
            updated = (
                session.query(SessionToken)
                .filter(SessionToken.token == token, SessionToken.expires_at > now)
                .update({SessionToken.expires_at: now + ttl}, synchronize_session=False)
            )
        logger.debug(f"sessions.set_expiry: updated={updated} ttl={ttl.total_seconds():.0f}s")
