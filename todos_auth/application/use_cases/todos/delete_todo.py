# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todos_auth.domain.todos.exceptions import TodoNotFoundError
from todos_auth.domain.todos.repositories import TodoRepository


class DeleteTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, owner_id: int, todo_id: int) -> None:
        if not self._todos.delete(owner_id, todo_id):
            raise TodoNotFoundError(todo_id)


class DeleteAllTodosUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, owner_id: int) -> int:
        return self._todos.delete_all(owner_id)
