# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta


@dataclass(slots=True, frozen=True)
class Session:
    """Login session keyed by its token.

    ``refreshed_at`` is the creation time until the first extend, then the
    time of the latest extend. Liveness is derived from it on every read.
    """

    token: str
    user_id: int
    refreshed_at: datetime

    def age(self, now: datetime) -> timedelta:
        return now - self.refreshed_at

    def expires_at(self, max_age: int) -> datetime:
        return self.refreshed_at + timedelta(seconds=max_age)

    def is_expired(self, now: datetime, max_age: int) -> bool:
        return self.age(now) >= timedelta(seconds=max_age)

    def refreshed(self, now: datetime) -> Session:
        return replace(self, refreshed_at=now)

    def __repr__(self) -> str:
        return (
            f"Session(token={self.token[:8]}…, user_id={self.user_id}, "
            f"refreshed_at={self.refreshed_at.isoformat()})"
        )
