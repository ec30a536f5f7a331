# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from todos_auth.domain.todos.entities import Todo
from todos_auth.domain.todos.repositories import TodoRepository


class CreateTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(
        self,
        owner_id: int,
        title: str,
        order: int | None = None,
        completed: bool = False,
    ) -> Todo:
        todo = Todo(
            id=0,
            owner_id=owner_id,
            title=title,
            order=order,
            completed=completed,
            created_at=datetime.now(UTC),
        )
        return self._todos.add(todo)
