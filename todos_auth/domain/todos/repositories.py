# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Todo, TodoChanges


class TodoRepository(Protocol):
    def list_for_owner(self, owner_id: int) -> Sequence[Todo]: ...
    def get(self, owner_id: int, todo_id: int) -> Todo | None: ...
    def add(self, todo: Todo) -> Todo: ...
    def update(self, owner_id: int, todo_id: int, changes: TodoChanges) -> Todo | None: ...
    def delete(self, owner_id: int, todo_id: int) -> bool: ...
    def delete_all(self, owner_id: int) -> int: ...
