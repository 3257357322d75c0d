# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from threading import RLock

from cookieauth.domain.users.entities import User
from cookieauth.domain.users.exceptions import (
    EmailAlreadyRegisteredError,
    IncorrectCredentialsError,
    PasswordMismatchError,
    UserNotFoundError,
)
from cookieauth.domain.users.repositories import CredentialStore, PasswordHasher
from cookieauth.shared.errors import PasswordHashingError
from cookieauth.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemoryCredentialStore(CredentialStore):
    """Users keyed by id with a unique email index.

    The id counter, the id map and the email index change together under one
    lock. Hashing and verification run outside it.
    """

    def __init__(
        self,
        password_hasher: PasswordHasher,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._hasher = password_hasher
        self._clock = clock or _utcnow
        self._lock = RLock()
        self._users: dict[int, User] = {}
        self._ids_by_email: dict[str, int] = {}
        self._last_user_id = 0
        self._dummy_hash = password_hasher.hash("dummy-password")

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def check_email_exists(self, email: str) -> None:
        with self._lock:
            if email in self._ids_by_email:
                raise EmailAlreadyRegisteredError()

    def register(
        self,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
        confirm_password: str,
    ) -> int:
        if password != confirm_password:
            raise PasswordMismatchError()

        # Cheap rejection before paying for the hash; re-checked below.
        self.check_email_exists(email)

        try:
            password_hash = self._hasher.hash(password)
        except Exception as exc:
            logger.exception("credentials.register: password hashing failed")
            raise PasswordHashingError() from exc

        with self._lock:
            if email in self._ids_by_email:
                raise EmailAlreadyRegisteredError()
            user = User(
                id=self._last_user_id + 1,
                email=email,
                first_name=first_name,
                last_name=last_name,
                password_hash=password_hash,
                created_at=self._clock(),
            )
            self._users[user.id] = user
            self._ids_by_email[email] = user.id
            self._last_user_id = user.id

        logger.info(f"credentials.register: ok user_id={user.id}")
        return user.id

    def login(self, email: str, password: str) -> User:
        with self._lock:
            user_id = self._ids_by_email.get(email)
            user = self._users.get(user_id) if user_id is not None else None

        if user is None:
            # Same cost as a real check so timing does not reveal registration.
            self._hasher.verify(password, self._dummy_hash)
            logger.info("credentials.login: rejected")
            raise IncorrectCredentialsError()

        if not self._hasher.verify(password, user.password_hash):
            logger.info(f"credentials.login: rejected user_id={user.id}")
            raise IncorrectCredentialsError()

        logger.info(f"credentials.login: ok user_id={user.id}")
        return user

    def get(self, user_id: int) -> User:
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(context={"user_id": user_id})
        return user


__all__ = ["InMemoryCredentialStore"]
