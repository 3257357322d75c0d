# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from cookieauth.domain.sessions.repositories import SessionStore
from cookieauth.domain.users.entities import User
from cookieauth.domain.users.repositories import CredentialStore


class LoginUserUseCase:
    def __init__(self, *, users: CredentialStore, sessions: SessionStore) -> None:
        self._users = users
        self._sessions = sessions

    def execute(self, email: str, password: str) -> tuple[User, str]:
        user = self._users.login(email, password)
        token = self._sessions.create(user.id)
        return user, token
