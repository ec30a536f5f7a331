# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Todo:

    id: int
    owner_id: int
    title: str
    order: int | None
    completed: bool
    created_at: datetime


@dataclass(slots=True, frozen=True)
class TodoChanges:
    """Partial update; ``None`` leaves a field untouched, ``clear_order`` unsets it."""

    title: str | None = None
    order: int | None = None
    completed: bool | None = None
    clear_order: bool = False

    def is_empty(self) -> bool:
        return (
            self.title is None
            and self.order is None
            and self.completed is None
            and not self.clear_order
        )
