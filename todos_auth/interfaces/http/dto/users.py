# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from todos_auth.domain.users.entities import User

MAX_EMAIL_LENGTH = 254


class CreateUserRequestDTO(BaseModel):
    name: str = Field(max_length=128)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("missing", "Name cannot be empty", {})
        return value

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        value = value.strip()
        if not value:
            raise PydanticCustomError("missing", "Email cannot be empty", {})
        if len(value) > MAX_EMAIL_LENGTH:
            raise PydanticCustomError(
                "string_too_long",
                "Email must have at most {max_length} characters",
                {"max_length": MAX_EMAIL_LENGTH},
            )
        return value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class UserResponseDTO(BaseModel):
    id: int
    name: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> "UserResponseDTO":
        return cls(id=user.id, name=user.name, email=user.email)
