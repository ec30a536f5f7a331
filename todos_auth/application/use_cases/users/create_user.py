# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from todos_auth.domain.users.entities import User
from todos_auth.domain.users.exceptions import EmailAlreadyRegisteredError
from todos_auth.domain.users.repositories import PasswordHasher, UserRepository


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CreateUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str) -> User:
        email = normalize_email(email)
        if self._users.find_by_email(email):
            raise EmailAlreadyRegisteredError()
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            name=name.strip(),
            email=email,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        # add() re-raises a concurrent duplicate as EmailAlreadyRegisteredError
        return self._users.add(user)
