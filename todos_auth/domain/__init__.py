# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .todos.entities import Todo
from .users.entities import Session, User

__all__ = [
    "Session",
    "Todo",
    "User",
]
