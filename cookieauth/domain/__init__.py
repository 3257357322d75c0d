# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import DomainError, InvariantViolation
from .sessions.entities import Session
from .users.entities import User

__all__ = [
    "DomainError",
    "InvariantViolation",
    "Session",
    "User",
]
