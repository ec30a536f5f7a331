# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.todos.create_todo import CreateTodoUseCase
from .use_cases.todos.delete_todo import DeleteAllTodosUseCase, DeleteTodoUseCase
from .use_cases.todos.get_todo import GetTodoUseCase
from .use_cases.todos.list_todos import ListTodosUseCase
from .use_cases.todos.update_todo import UpdateTodoUseCase
from .use_cases.users.authenticate_session import AuthenticateSessionUseCase
from .use_cases.users.authenticate_user import AuthenticateUserUseCase
from .use_cases.users.create_user import CreateUserUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase

__all__ = [
    "AuthenticateSessionUseCase",
    "AuthenticateUserUseCase",
    "CreateTodoUseCase",
    "CreateUserUseCase",
    "DeleteAllTodosUseCase",
    "DeleteTodoUseCase",
    "GetTodoUseCase",
    "ListTodosUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "UpdateTodoUseCase",
]
