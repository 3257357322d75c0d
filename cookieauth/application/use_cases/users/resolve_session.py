# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from cookieauth.domain.sessions.entities import Session
from cookieauth.domain.sessions.exceptions import SessionNotFoundError
from cookieauth.domain.sessions.repositories import SessionStore
from cookieauth.domain.users.entities import User
from cookieauth.domain.users.exceptions import UserNotFoundError
from cookieauth.domain.users.repositories import CredentialStore
from cookieauth.shared.logging import logger


class ResolveSessionUseCase:
    """Map a session token to its user, sliding the session forward."""

    def __init__(self, *, users: CredentialStore, sessions: SessionStore) -> None:
        self._users = users
        self._sessions = sessions

    def execute(self, token: str | None) -> tuple[User, Session]:
        if not token:
            raise SessionNotFoundError()
        session = self._sessions.extend(token)
        try:
            user = self._users.get(session.user_id)
        except UserNotFoundError:
            # Sessions reference users by id only, so the user may be gone.
            logger.warning(f"sessions.resolve: dangling user_id={session.user_id}")
            self._sessions.delete(token)
            raise
        return user, session
