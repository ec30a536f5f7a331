# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for the single-request email/password check."""

from __future__ import annotations

import secrets
from functools import cached_property

from todos_auth.domain.users.entities import User
from todos_auth.domain.users.exceptions import InvalidCredentialsError
from todos_auth.domain.users.repositories import PasswordHasher, UserRepository

from .create_user import normalize_email


class AuthenticateUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    @cached_property
    def _dummy_hash(self) -> str:
        # Unknown emails pay for one verify too, so both failures take as long.
        return self._password_hasher.hash(secrets.token_urlsafe(16))

    def execute(self, email: str, password: str) -> User:
        user = self._users.find_by_email(normalize_email(email))
        if user is None:
            self._password_hasher.verify(password, self._dummy_hash)
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        return user
