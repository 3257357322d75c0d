# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from cookieauth.domain.sessions.repositories import SessionStore
from cookieauth.domain.users.entities import User
from cookieauth.domain.users.repositories import CredentialStore


class SignupUserUseCase:
    def __init__(self, *, users: CredentialStore, sessions: SessionStore) -> None:
        self._users = users
        self._sessions = sessions

    def execute(
        self,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
        confirm_password: str,
    ) -> tuple[User, str]:
        self._users.check_email_exists(email)
        user_id = self._users.register(email, first_name, last_name, password, confirm_password)
        user = self._users.get(user_id)
        token = self._sessions.create(user.id)
        return user, token
