# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from todos_auth.infrastructure.container import Container
from todos_auth.infrastructure.db import Database
from todos_auth.infrastructure.observability import configure_metrics
from todos_auth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    Clock,
    utcnow,
)
from todos_auth.shared.config import AppConfig, load_config
from todos_auth.shared.logging import logger, setup_logging
from todos_auth.shared.middleware import configure_error_handling, configure_request_logging

CONTAINER_KEY = "todos_auth.container"
CORS_METHODS = ["GET", "OPTIONS", "POST", "DELETE", "PATCH"]


def create_app(
    config: AppConfig | None = None,
    *,
    database: Database | None = None,
    migrate: bool = False,
    clock: Clock = utcnow,
) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, config.log_file)

    database = database or Database(config.database)
    if migrate or database.in_memory:
        database.create_schema()

    container = Container(config, database, clock=clock)

    app = Flask(__name__)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_metrics(app, enabled=config.observability.metrics_enabled)

    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions[CONTAINER_KEY] = container

    origins = config.security.allowed_origins
    CORS(
        app,
        resources={r"/api/*": {"origins": origins}},
        allow_headers=["Content-Type"],
        methods=CORS_METHODS,
        supports_credentials=any(o != "*" for o in origins),
    )

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.user_controller.as_blueprint())
    app.register_blueprint(container.todo_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(
        f"Flask app initialized (service={config.observability.service_name}, "
        f"in_memory_db={database.in_memory})"
    )
    return app


def get_container(app: Flask) -> Container:
    return app.extensions[CONTAINER_KEY]
