"""Use-case for revoking session tokens."""

from __future__ import annotations

from cookieauth.domain.sessions.repositories import SessionStore


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self, token: str | None) -> None:
        if token:
            self._sessions.delete(token)
