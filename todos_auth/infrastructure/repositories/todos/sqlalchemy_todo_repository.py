# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy.orm import Session

from todos_auth.domain.todos.entities import Todo as DomainTodo
from todos_auth.domain.todos.entities import TodoChanges
from todos_auth.domain.todos.repositories import TodoRepository
from todos_auth.domain.users.entities import as_utc
from todos_auth.infrastructure.db.models import Todo
from todos_auth.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: Todo) -> DomainTodo:
    return DomainTodo(
        id=row.id,
        owner_id=row.owner_id,
        title=row.title,
        order=row.order,
        completed=bool(row.completed),
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyTodoRepository(TodoRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_for_owner(self, owner_id: int) -> Sequence[DomainTodo]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = (
                session.query(Todo)
                .filter(Todo.owner_id == owner_id)
                .order_by(Todo.order.is_(None), Todo.order.asc(), Todo.id.asc())
                .all()
            )
            return [_to_domain(row) for row in rows]

    def get(self, owner_id: int, todo_id: int) -> DomainTodo | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._owned(session, owner_id, todo_id)
            return _to_domain(row) if row else None

    def add(self, todo: DomainTodo) -> DomainTodo:
        with unit_of_work_scope(self._session_factory) as session:
            row = Todo(
                owner_id=todo.owner_id,
                title=todo.title,
                order=todo.order,
                completed=todo.completed,
                created_at=todo.created_at,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def update(self, owner_id: int, todo_id: int, changes: TodoChanges) -> DomainTodo | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._owned(session, owner_id, todo_id)
            if not row:
                return None
            if changes.title is not None:
                row.title = changes.title
            if changes.clear_order:
                row.order = None
            elif changes.order is not None:
                row.order = changes.order
            if changes.completed is not None:
                row.completed = changes.completed
            session.flush()
            return _to_domain(row)

    def delete(self, owner_id: int, todo_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            deleted = (
                session.query(Todo)
                .filter(Todo.id == todo_id, Todo.owner_id == owner_id)
                .delete(synchronize_session=False)
            )
            return deleted > 0

    def delete_all(self, owner_id: int) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            return (
                session.query(Todo)
                .filter(Todo.owner_id == owner_id)
                .delete(synchronize_session=False)
            )

    @staticmethod
    def _owned(session: Session, owner_id: int, todo_id: int) -> Todo | None:
        return (
            session.query(Todo)
            .filter(Todo.id == todo_id, Todo.owner_id == owner_id)
            .first()
        )
