# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from cookieauth.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class User:
    """Registered account. Stores hand out copies of this, never live rows."""

    id: int
    email: str
    first_name: str
    last_name: str
    password_hash: str
    created_at: datetime

    def __post_init__(self) -> None:
        if self.id <= 0:
            raise InvariantViolation("user id must be positive", field="id")
        if not self.password_hash:
            raise InvariantViolation("password hash must not be empty", field="password_hash")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"User(id={self.id}, first_name={self.first_name!r}, last_name={self.last_name!r})"
