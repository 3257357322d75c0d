# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Session


class SessionStore(Protocol):
    @property
    def max_age(self) -> int: ...
    def create(self, user_id: int) -> str: ...
    def get(self, token: str) -> Session: ...
    def extend(self, token: str) -> Session: ...
    def delete(self, token: str) -> None: ...
    def is_authenticated(self, token: str | None) -> bool: ...
