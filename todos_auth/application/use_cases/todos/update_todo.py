# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todos_auth.domain.todos.entities import Todo, TodoChanges
from todos_auth.domain.todos.exceptions import TodoNotFoundError
from todos_auth.domain.todos.repositories import TodoRepository


class UpdateTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, owner_id: int, todo_id: int, changes: TodoChanges) -> Todo:
        if changes.is_empty():
            current = self._todos.get(owner_id, todo_id)
        else:
            current = self._todos.update(owner_id, todo_id, changes)
        if current is None:
            raise TodoNotFoundError(todo_id)
        return current
