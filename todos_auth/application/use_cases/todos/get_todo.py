# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todos_auth.domain.todos.entities import Todo
from todos_auth.domain.todos.exceptions import TodoNotFoundError
from todos_auth.domain.todos.repositories import TodoRepository


class GetTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, owner_id: int, todo_id: int) -> Todo:
        todo = self._todos.get(owner_id, todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo
