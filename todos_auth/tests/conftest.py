from __future__ import annotations

import base64
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from flask import Flask
from flask.testing import FlaskClient

from todos_auth.app import create_app
from todos_auth.infrastructure.db import Database
from todos_auth.shared.config import AppConfig, DatabaseConfig, SessionConfig

COOKIE_NAME = "SESSION_ID"


class FakeClock:
    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def basic_auth(email: str, password: str) -> dict[str, str]:
    raw = f"{email}:{password}".encode()
    return {"Authorization": f"Basic {base64.b64encode(raw).decode()}"}


def session_cookie(token: str) -> dict[str, str]:
    return {"Cookie": f"{COOKIE_NAME}={token}"}


def token_from(response) -> str:
    header = response.headers.get("Set-Cookie", "")
    name, _, rest = header.partition("=")
    assert name == COOKIE_NAME
    return rest.split(";", 1)[0]


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(url="sqlite://"),
        session=SessionConfig(cookie_name=COOKIE_NAME, ttl_seconds=3600),
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def database(config: AppConfig) -> Iterator[Database]:
    db = Database(config.database)
    db.create_schema()
    yield db
    db.drop_schema()
    db.dispose()


@pytest.fixture()
def app(config: AppConfig, database: Database, clock: FakeClock) -> Flask:
    return create_app(config, database=database, clock=clock)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    # Cookies are passed explicitly so a test can replay a token after logout.
    return app.test_client(use_cookies=False)
