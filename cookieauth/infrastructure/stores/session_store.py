# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime
from threading import RLock

from cookieauth.domain.sessions.entities import Session
from cookieauth.domain.sessions.exceptions import SessionExpiredError, SessionNotFoundError
from cookieauth.domain.sessions.repositories import SessionStore
from cookieauth.shared.logging import logger

DEFAULT_MAX_SESSION_AGE = 300


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemorySessionStore(SessionStore):
    """Session tokens with sliding, server-side enforced expiry.

    A record lives from ``create`` until ``delete``. A record whose age has
    reached ``max_age`` is expired: the first access that notices removes it
    and raises :class:`SessionExpiredError`.
    """

    def __init__(
        self,
        max_age: int = DEFAULT_MAX_SESSION_AGE,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if max_age <= 0:
            raise ValueError("max_age must be positive")
        self._max_age = max_age
        self._clock = clock or _utcnow
        self._lock = RLock()
        self._sessions: dict[str, Session] = {}

    @property
    def max_age(self) -> int:
        return self._max_age

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, user_id: int) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[token] = Session(
                token=token, user_id=user_id, refreshed_at=self._clock()
            )
        logger.debug(f"sessions.create: user={user_id} tok={token[:8]}…")
        return token

    def get(self, token: str) -> Session:
        with self._lock:
            return self._live(token)

    def extend(self, token: str) -> Session:
        with self._lock:
            session = self._live(token).refreshed(self._clock())
            self._sessions[token] = session
            return session

    def delete(self, token: str) -> None:
        with self._lock:
            removed = self._sessions.pop(token, None)
        if removed is not None:
            logger.debug(f"sessions.delete: user={removed.user_id} tok={token[:8]}…")

    def is_authenticated(self, token: str | None) -> bool:
        if not token:
            return False
        try:
            self.extend(token)
        except (SessionNotFoundError, SessionExpiredError) as exc:
            logger.debug(f"sessions.is_authenticated: {exc.code} tok={token[:8]}…")
            return False
        return True

    def prune_expired(self) -> int:
        now = self._clock()
        with self._lock:
            stale = [
                token
                for token, session in self._sessions.items()
                if session.is_expired(now, self._max_age)
            ]
            for token in stale:
                del self._sessions[token]
        if stale:
            logger.info(f"sessions.prune_expired: removed={len(stale)}")
        return len(stale)

    def _live(self, token: str) -> Session:
        session = self._sessions.get(token)
        if session is None:
            raise SessionNotFoundError()
        if session.is_expired(self._clock(), self._max_age):
            del self._sessions[token]
            logger.info(f"sessions: expired user={session.user_id} tok={token[:8]}…")
            raise SessionExpiredError()
        return session


__all__ = ["DEFAULT_MAX_SESSION_AGE", "InMemorySessionStore"]
