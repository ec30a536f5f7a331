# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Audit trail for account and session events.

Events are plain log lines bound with ``audit=True`` so a sink can route
them separately. Detail keys that look like credentials are masked before
the line is built.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from todos_auth.shared.logging import logger

_MASKED_KEYS = ("password", "token", "hash", "secret", "cookie", "authorization")
MASK = "***REDACTED***"


class AuditAction(str, Enum):
    USER_CREATED = "user_created"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"


@dataclass(slots=True, frozen=True)
class AuditEvent:
    action: AuditAction
    user_id: int | None = None
    ip_address: str | None = None
    success: bool = True
    details: Mapping[str, Any] = field(default_factory=dict)

    def masked_details(self) -> dict[str, Any]:
        return {
            key: MASK if any(part in key.lower() for part in _MASKED_KEYS) else value
            for key, value in self.details.items()
        }

    def render(self) -> str:
        parts = [
            f"AUDIT: {self.action.value}",
            f"user_id={self.user_id}",
            f"ip={self.ip_address}",
            f"success={self.success}",
        ]
        details = self.masked_details()
        if details:
            parts.append(f"details={details}")
        return " | ".join(parts)


def audit_log(
    action: AuditAction,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> AuditEvent:
    event = AuditEvent(
        action=action,
        user_id=user_id,
        ip_address=ip_address,
        success=success,
        details=details or {},
    )
    # Failed logins are the only events worth a warning.
    level = "INFO" if success else "WARNING"
    logger.bind(audit=True).log(level, event.render())
    return event


__all__ = ["AuditAction", "AuditEvent", "audit_log"]
