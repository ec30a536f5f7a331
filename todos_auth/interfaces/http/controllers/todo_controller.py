# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig


from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request

from todos_auth.application.use_cases.todos.create_todo import CreateTodoUseCase
from todos_auth.application.use_cases.todos.delete_todo import (
    DeleteAllTodosUseCase,
    DeleteTodoUseCase,
)
from todos_auth.application.use_cases.todos.get_todo import GetTodoUseCase
from todos_auth.application.use_cases.todos.list_todos import ListTodosUseCase
from todos_auth.application.use_cases.todos.update_todo import UpdateTodoUseCase
from todos_auth.interfaces.http.authenticators import SessionAuthenticator, current_user
from todos_auth.interfaces.http.dto.todos import (
    MAX_INT,
    CreateTodoRequestDTO,
    TodoResponseDTO,
    UpdateTodoRequestDTO,
)
from todos_auth.shared.errors.validation import parse_body
from todos_auth.shared.logging import logger

# Ids beyond the column range never match a route.
TODO_ID_RULE = f"/<int(max={MAX_INT}):todo_id>"


class TodoController:
    def __init__(
        self,
        *,
        list_use_case: ListTodosUseCase,
        create_use_case: CreateTodoUseCase,
        get_use_case: GetTodoUseCase,
        update_use_case: UpdateTodoUseCase,
        delete_use_case: DeleteTodoUseCase,
        delete_all_use_case: DeleteAllTodosUseCase,
        session_authenticator: SessionAuthenticator,
    ) -> None:
        self._list = list_use_case
        self._create = create_use_case
        self._get = get_use_case
        self._update = update_use_case
        self._delete = delete_use_case
        self._delete_all = delete_all_use_case
        self._session = session_authenticator

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("todos", __name__, url_prefix="/api/todos")
        bp.add_url_rule("", view_func=self._session(self.list_todos), methods=["GET"])
        bp.add_url_rule("", view_func=self._session(self.create), methods=["POST"])
        bp.add_url_rule("", view_func=self._session(self.delete_all), methods=["DELETE"])
        bp.add_url_rule(
            TODO_ID_RULE, view_func=self._session(self.get), methods=["GET"]
        )
        bp.add_url_rule(
            TODO_ID_RULE, view_func=self._session(self.update), methods=["PATCH"]
        )
        bp.add_url_rule(
            TODO_ID_RULE, view_func=self._session(self.delete), methods=["DELETE"]
        )
        return bp

    def list_todos(self) -> Response:
        user_id = current_user().id
        items = self._list.execute(user_id)
        logger.info(f"todos.list: ok (user_id={user_id}, n={len(items)})")
        return jsonify([TodoResponseDTO.from_domain(todo).model_dump() for todo in items])

    def create(self) -> tuple[Response, int]:
        user_id = current_user().id
        dto = parse_body(CreateTodoRequestDTO, request.get_json(silent=True))
        todo = self._create.execute(user_id, dto.title, dto.order, dto.completed)
        logger.info(f"todos.create: ok (user_id={user_id}, todo_id={todo.id})")
        return jsonify(TodoResponseDTO.from_domain(todo).model_dump()), HTTPStatus.CREATED

    def get(self, todo_id: int) -> Response:
        todo = self._get.execute(current_user().id, todo_id)
        return jsonify(TodoResponseDTO.from_domain(todo).model_dump())

    def update(self, todo_id: int) -> Response:
        user_id = current_user().id
        dto = parse_body(UpdateTodoRequestDTO, request.get_json(silent=True))
        todo = self._update.execute(user_id, todo_id, dto.to_changes())
        logger.info(f"todos.update: ok (user_id={user_id}, todo_id={todo_id})")
        return jsonify(TodoResponseDTO.from_domain(todo).model_dump())

    def delete(self, todo_id: int) -> Response:
        user_id = current_user().id
        self._delete.execute(user_id, todo_id)
        logger.info(f"todos.delete: ok (user_id={user_id}, todo_id={todo_id})")
        return Response(status=HTTPStatus.OK)

    def delete_all(self) -> Response:
        user_id = current_user().id
        deleted = self._delete_all.execute(user_id)
        logger.info(f"todos.delete_all: ok (user_id={user_id}, n={deleted})")
        return jsonify({"deleted": deleted})
