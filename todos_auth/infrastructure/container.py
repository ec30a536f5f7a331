# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from todos_auth.application.services.password_hashing import WerkzeugPasswordHasher
from todos_auth.application.use_cases.todos.create_todo import CreateTodoUseCase
from todos_auth.application.use_cases.todos.delete_todo import (
    DeleteAllTodosUseCase,
    DeleteTodoUseCase,
)
from todos_auth.application.use_cases.todos.get_todo import GetTodoUseCase
from todos_auth.application.use_cases.todos.list_todos import ListTodosUseCase
from todos_auth.application.use_cases.todos.update_todo import UpdateTodoUseCase
from todos_auth.application.use_cases.users.authenticate_session import (
    AuthenticateSessionUseCase,
)
from todos_auth.application.use_cases.users.authenticate_user import (
    AuthenticateUserUseCase,
)
from todos_auth.application.use_cases.users.create_user import CreateUserUseCase
from todos_auth.application.use_cases.users.login_user import LoginUserUseCase
from todos_auth.application.use_cases.users.logout_user import LogoutUserUseCase
from todos_auth.infrastructure.db import Database
from todos_auth.infrastructure.repositories.todos.sqlalchemy_todo_repository import (
    SqlAlchemyTodoRepository,
)
from todos_auth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    Clock,
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
    utcnow,
)
from todos_auth.interfaces.http.authenticators import (
    BasicAuthenticator,
    SessionAuthenticator,
)
from todos_auth.interfaces.http.controllers.misc_controller import MiscController
from todos_auth.interfaces.http.controllers.todo_controller import TodoController
from todos_auth.interfaces.http.controllers.user_controller import UserController
from todos_auth.shared.config import AppConfig


class Container:
    """Wires one application's object graph. Nothing here is process-global."""

    def __init__(self, config: AppConfig, database: Database, *, clock: Clock = utcnow) -> None:
        self.config = config
        self.database = database
        self._clock = clock

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database.session_factory)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(self.database.session_factory, clock=self._clock)

    @cached_property
    def todo_repository(self) -> SqlAlchemyTodoRepository:
        return SqlAlchemyTodoRepository(self.database.session_factory)

    # User use cases

    @cached_property
    def create_user_use_case(self) -> CreateUserUseCase:
        return CreateUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def authenticate_session_use_case(self) -> AuthenticateSessionUseCase:
        return AuthenticateSessionUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            sessions=self.session_repository,
            session_ttl=timedelta(seconds=self.config.session.ttl_seconds),
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository)

    # Todo use cases

    @cached_property
    def list_todos_use_case(self) -> ListTodosUseCase:
        return ListTodosUseCase(todos=self.todo_repository)

    @cached_property
    def create_todo_use_case(self) -> CreateTodoUseCase:
        return CreateTodoUseCase(todos=self.todo_repository)

    @cached_property
    def get_todo_use_case(self) -> GetTodoUseCase:
        return GetTodoUseCase(todos=self.todo_repository)

    @cached_property
    def update_todo_use_case(self) -> UpdateTodoUseCase:
        return UpdateTodoUseCase(todos=self.todo_repository)

    @cached_property
    def delete_todo_use_case(self) -> DeleteTodoUseCase:
        return DeleteTodoUseCase(todos=self.todo_repository)

    @cached_property
    def delete_all_todos_use_case(self) -> DeleteAllTodosUseCase:
        return DeleteAllTodosUseCase(todos=self.todo_repository)

    # Authenticators

    @cached_property
    def basic_authenticator(self) -> BasicAuthenticator:
        return BasicAuthenticator(authenticate_user=self.authenticate_user_use_case)

    @cached_property
    def session_authenticator(self) -> SessionAuthenticator:
        return SessionAuthenticator(
            authenticate_session=self.authenticate_session_use_case,
            cookie_name=self.config.session.cookie_name,
        )

    # Controllers

    @cached_property
    def user_controller(self) -> UserController:
        return UserController(
            create_use_case=self.create_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            basic_authenticator=self.basic_authenticator,
            session_authenticator=self.session_authenticator,
            session_config=self.config.session,
            security_config=self.config.security,
        )

    @cached_property
    def todo_controller(self) -> TodoController:
        return TodoController(
            list_use_case=self.list_todos_use_case,
            create_use_case=self.create_todo_use_case,
            get_use_case=self.get_todo_use_case,
            update_use_case=self.update_todo_use_case,
            delete_use_case=self.delete_todo_use_case,
            delete_all_use_case=self.delete_all_todos_use_case,
            session_authenticator=self.session_authenticator,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            database=self.database,
            metrics_enabled=self.config.observability.metrics_enabled,
        )
