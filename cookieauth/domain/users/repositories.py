# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import User


class CredentialStore(Protocol):
    def check_email_exists(self, email: str) -> None: ...
    def register(
        self,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
        confirm_password: str,
    ) -> int: ...
    def login(self, email: str, password: str) -> User: ...
    def get(self, user_id: int) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
