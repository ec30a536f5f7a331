# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")
INSECURE_SECRET_KEYS = ("", "dev", "development", "test", "changeme")
MAX_RECOMMENDED_TTL_SECONDS = 24 * 3600


def _parse_flag(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class _Section(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )


class DatabaseConfig(_Section):
    url: str = Field("sqlite:///todos.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    def is_in_memory(self) -> bool:
        return self.url in IN_MEMORY_URLS


class SessionConfig(_Section):
    cookie_name: str = Field("SESSION_ID", min_length=1, alias="SESSION_COOKIE_NAME")
    ttl_seconds: int = Field(3600, ge=1, alias="SESSION_TTL_SECONDS")


class ObservabilityConfig(_Section):
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")
    service_name: str = Field("todos-auth-server", alias="SERVICE_NAME")

    @field_validator("metrics_enabled", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


class SecurityConfig(_Section):
    # Cookie security
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_secure", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _observability_config_factory() -> ObservabilityConfig:
    return ObservabilityConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    session: SessionConfig = Field(default_factory=_session_config_factory)
    observability: ObservabilityConfig = Field(default_factory=_observability_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        validate_by_name=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_flag(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key.lower() in INSECURE_SECRET_KEYS:
            print(
                "CRITICAL: insecure SECRET_KEY in production. "
                "Set SECRET_KEY to a long random value.",
                file=sys.stderr,
            )
            sys.exit(1)

        for warning in self.production_warnings():
            print(f"WARNING: {warning}", file=sys.stderr)

        return self

    def production_warnings(self) -> list[str]:
        warnings = []
        if not self.security.cookie_secure:
            warnings.append("session cookie is sent without the Secure flag")
        if self.security.cookie_samesite.lower() == "none" and not self.security.cookie_secure:
            warnings.append("SameSite=None cookies are rejected by browsers without Secure")
        if "*" in self.security.allowed_origins:
            warnings.append("CORS allows any origin")
        if not self.security.enable_hsts:
            warnings.append("HSTS is disabled")
        if self.session.ttl_seconds > MAX_RECOMMENDED_TTL_SECONDS:
            warnings.append(
                f"sessions live for {self.session.ttl_seconds}s "
                f"(over {MAX_RECOMMENDED_TTL_SECONDS}s)"
            )
        if self.database.is_in_memory():
            warnings.append("in-memory database loses every account on restart")
        return warnings

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ObservabilityConfig",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
