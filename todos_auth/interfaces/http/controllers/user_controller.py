# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request

from todos_auth.application.use_cases.users.create_user import CreateUserUseCase
from todos_auth.application.use_cases.users.login_user import LoginUserUseCase
from todos_auth.application.use_cases.users.logout_user import LogoutUserUseCase
from todos_auth.infrastructure.audit import AuditAction, audit_log
from todos_auth.interfaces.http.authenticators import (
    BasicAuthenticator,
    SessionAuthenticator,
    current_session_token,
    current_user,
)
from todos_auth.interfaces.http.dto.users import CreateUserRequestDTO, UserResponseDTO
from todos_auth.shared.config import SecurityConfig, SessionConfig
from todos_auth.shared.errors.validation import parse_body
from todos_auth.shared.logging import logger


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class UserController:
    def __init__(
        self,
        *,
        create_use_case: CreateUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        basic_authenticator: BasicAuthenticator,
        session_authenticator: SessionAuthenticator,
        session_config: SessionConfig,
        security_config: SecurityConfig,
    ) -> None:
        self._create_use_case = create_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._basic = basic_authenticator
        self._session = session_authenticator
        self._session_config = session_config
        self._security_config = security_config

    def create(self) -> tuple[Response, int]:
        dto = parse_body(CreateUserRequestDTO, request.get_json(silent=True))

        user = self._create_use_case.execute(dto.name, dto.email, dto.password)

        audit_log(
            AuditAction.USER_CREATED,
            user_id=user.id,
            ip_address=_get_client_ip(),
            success=True,
        )
        logger.info(f"users.create: ok user_id={user.id}")
        return jsonify(UserResponseDTO.from_domain(user).model_dump()), HTTPStatus.CREATED

    def login(self) -> Response:
        user = current_user()
        session = self._login_use_case.execute(user)

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=user.id,
            ip_address=_get_client_ip(),
            success=True,
        )

        response = Response(status=HTTPStatus.OK)
        response.set_cookie(
            self._session_config.cookie_name,
            session.token,
            max_age=int(self._login_use_case.session_ttl.total_seconds()),
            expires=session.expires_at,
            httponly=True,
            samesite=self._security_config.cookie_samesite,
            secure=self._security_config.cookie_secure,
        )
        logger.info(f"users.login: ok user_id={user.id}")
        return response

    def logout(self) -> Response:
        user = current_user()
        self._logout_use_case.execute(current_session_token())

        audit_log(
            AuditAction.LOGOUT,
            user_id=user.id,
            ip_address=_get_client_ip(),
            success=True,
        )

        response = Response(status=HTTPStatus.OK)
        response.delete_cookie(
            self._session_config.cookie_name,
            httponly=True,
            samesite=self._security_config.cookie_samesite,
            secure=self._security_config.cookie_secure,
        )
        logger.info(f"users.logout: ok user_id={user.id}")
        return response

    def current(self) -> Response:
        return jsonify(UserResponseDTO.from_domain(current_user()).model_dump())

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/users")
        bp.add_url_rule("", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/login", view_func=self._basic(self.login), methods=["POST"])
        bp.add_url_rule("", view_func=self._session(self.current), methods=["GET"])
        bp.add_url_rule("/logout", view_func=self._session(self.logout), methods=["POST"])
        return bp
