from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from todos_auth.application.use_cases.users.authenticate_session import (
    AuthenticateSessionUseCase,
)
from todos_auth.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from todos_auth.application.use_cases.users.create_user import CreateUserUseCase
from todos_auth.application.use_cases.users.login_user import LoginUserUseCase
from todos_auth.domain.users.entities import Session, User
from todos_auth.domain.users.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    SessionNotFoundError,
)
from todos_auth.interfaces.http.authenticators import BasicAuthenticator, SessionAuthenticator
from todos_auth.interfaces.http.controllers.user_controller import UserController
from todos_auth.shared.config import SecurityConfig, SessionConfig
from todos_auth.shared.middleware.error_handler import configure_error_handling

from conftest import basic_auth, session_cookie

ALICE = User(
    id=1,
    name="Alice",
    email="a@x.com",
    password_hash="hash",
    created_at=datetime.now(UTC),
)
TOKEN = "t" * 43


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _controller(**overrides) -> UserController:
    authenticate_user = MagicMock()
    authenticate_user.execute.return_value = ALICE
    authenticate_session = MagicMock()
    authenticate_session.execute.return_value = ALICE

    options = {
        "create_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "logout_use_case": MagicMock(),
        "basic_authenticator": BasicAuthenticator(
            authenticate_user=cast(AuthenticateUserUseCase, authenticate_user)
        ),
        "session_authenticator": SessionAuthenticator(
            authenticate_session=cast(AuthenticateSessionUseCase, authenticate_session),
            cookie_name="SESSION_ID",
        ),
        "session_config": SessionConfig(cookie_name="SESSION_ID", ttl_seconds=3600),
        "security_config": SecurityConfig(),
    }
    options.update(overrides)
    return UserController(**options)


def test_create_endpoint_returns_user_without_hash(flask_app: Flask) -> None:
    create_called: dict[str, tuple[str, str, str]] = {}

    class StubCreate:
        def execute(self, name: str, email: str, password: str) -> User:
            create_called["args"] = (name, email, password)
            return ALICE

    controller = _controller(create_use_case=cast(CreateUserUseCase, StubCreate()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/users",
            json={"name": "Alice", "email": "A@x.com", "password": "secret123"},
        )

    assert response.status_code == 201
    assert create_called["args"] == ("Alice", "a@x.com", "secret123")
    assert response.get_json() == {"id": 1, "name": "Alice", "email": "a@x.com"}


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"email": "a@x.com", "password": "secret123"}, "name"),
        ({"name": "  ", "email": "a@x.com", "password": "secret123"}, "name"),
        ({"name": "Alice", "email": "not-an-email", "password": "secret123"}, "email"),
        ({"name": "Alice", "email": "a..b@x.com", "password": "secret123"}, "email"),
        ({"name": "Alice", "email": "a@x", "password": "secret123"}, "email"),
        ({"name": "Alice", "email": "a" * 250 + "@x.com", "password": "secret123"}, "email"),
        ({"name": "Alice", "email": "a@x.com", "password": "short"}, "password"),
        ({"name": "A" * 129, "email": "a@x.com", "password": "secret123"}, "name"),
    ],
)
def test_create_invalid_payload_returns_422(flask_app: Flask, payload: dict, field: str) -> None:
    create_use_case = MagicMock()
    controller = _controller(create_use_case=create_use_case)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/users", json=payload)

    assert response.status_code == 422
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert field in body["context"]["fields"]
    create_use_case.execute.assert_not_called()


def test_create_non_json_body_returns_422(flask_app: Flask) -> None:
    controller = _controller()
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/users", data="name=alice")

    assert response.status_code == 422


def test_create_duplicate_email_returns_409(flask_app: Flask) -> None:
    create_use_case = MagicMock()
    create_use_case.execute.side_effect = EmailAlreadyRegisteredError()
    controller = _controller(create_use_case=create_use_case)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/users",
            json={"name": "Alice", "email": "a@x.com", "password": "secret123"},
        )

    assert response.status_code == 409
    assert response.get_json() == {
        "error": "email_already_registered",
        "context": {"fields": ["email"]},
    }


def test_login_sets_session_cookie(flask_app: Flask) -> None:
    login_use_case = MagicMock(spec=LoginUserUseCase)
    login_use_case.session_ttl = timedelta(seconds=3600)
    login_use_case.execute.return_value = Session(
        token=TOKEN, user_id=1, expires_at=datetime.now(UTC) + timedelta(hours=1)
    )
    controller = _controller(login_use_case=login_use_case)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/users/login", headers=basic_auth("a@x.com", "secret123"))

    assert response.status_code == 200
    assert response.data == b""
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith(f"SESSION_ID={TOKEN};")
    assert "Max-Age=3600" in cookie
    assert "HttpOnly" in cookie
    assert "SameSite=Lax" in cookie
    login_use_case.execute.assert_called_once_with(ALICE)


def test_login_without_credentials_returns_401(flask_app: Flask) -> None:
    login_use_case = MagicMock()
    controller = _controller(login_use_case=login_use_case)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/users/login")

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}
    assert "Set-Cookie" not in response.headers
    login_use_case.execute.assert_not_called()


def test_login_with_bearer_scheme_returns_401(flask_app: Flask) -> None:
    controller = _controller()
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/users/login", headers={"Authorization": "Bearer abcdefghijklmnop"}
        )

    assert response.status_code == 401


def test_login_wrong_password_returns_401(flask_app: Flask) -> None:
    authenticate_user = MagicMock()
    authenticate_user.execute.side_effect = InvalidCredentialsError()
    login_use_case = MagicMock()
    controller = _controller(
        login_use_case=login_use_case,
        basic_authenticator=BasicAuthenticator(authenticate_user=authenticate_user),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/users/login", headers=basic_auth("a@x.com", "wrong"))

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}
    login_use_case.execute.assert_not_called()


def test_current_user_requires_session(flask_app: Flask) -> None:
    authenticate_session = MagicMock()
    authenticate_session.execute.side_effect = SessionNotFoundError()
    controller = _controller(
        session_authenticator=SessionAuthenticator(
            authenticate_session=authenticate_session, cookie_name="SESSION_ID"
        )
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client(use_cookies=False) as client:
        response = client.get("/api/users")

    assert response.status_code == 401
    authenticate_session.execute.assert_called_once_with(None)


def test_current_user_returns_profile(flask_app: Flask) -> None:
    controller = _controller()
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client(use_cookies=False) as client:
        response = client.get("/api/users", headers=session_cookie(TOKEN))

    assert response.status_code == 200
    assert response.get_json() == {"id": 1, "name": "Alice", "email": "a@x.com"}


def test_logout_expires_token_and_clears_cookie(flask_app: Flask) -> None:
    logout_use_case = MagicMock()
    controller = _controller(logout_use_case=logout_use_case)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client(use_cookies=False) as client:
        response = client.post("/api/users/logout", headers=session_cookie(TOKEN))

    assert response.status_code == 200
    logout_use_case.execute.assert_called_once_with(TOKEN)
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("SESSION_ID=;")
    assert "Max-Age=0" in cookie
