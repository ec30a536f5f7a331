# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from todos_auth.shared.errors.base import DomainError


class TodoNotFoundError(DomainError):
    code = "todo_not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, todo_id: int) -> None:
        super().__init__(context={"todo_id": todo_id})
