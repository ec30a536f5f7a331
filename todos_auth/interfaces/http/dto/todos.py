# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from todos_auth.domain.todos.entities import Todo, TodoChanges

# Signed 32-bit range, the widest integer every supported database stores.
MIN_INT = -(2**31)
MAX_INT = 2**31 - 1


def _clean_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError("missing", "Title cannot be empty", {})
    return value


class CreateTodoRequestDTO(BaseModel):
    title: str = Field(max_length=256)
    order: int | None = Field(None, ge=MIN_INT, le=MAX_INT)
    completed: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _clean_title(value)


class UpdateTodoRequestDTO(BaseModel):
    title: str | None = Field(None, max_length=256)
    order: int | None = Field(None, ge=MIN_INT, le=MAX_INT)
    completed: bool | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _clean_title(value)

    def to_changes(self) -> TodoChanges:
        # An explicit ``"order": null`` unsets the order; an absent key keeps it.
        clear_order = "order" in self.model_fields_set and self.order is None
        return TodoChanges(
            title=self.title,
            order=self.order,
            completed=self.completed,
            clear_order=clear_order,
        )


class TodoResponseDTO(BaseModel):
    id: int
    title: str
    order: int | None
    completed: bool

    @classmethod
    def from_domain(cls, todo: Todo) -> "TodoResponseDTO":
        return cls(id=todo.id, title=todo.title, order=todo.order, completed=todo.completed)
