# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from cookieauth.application.services.password_hashing import WerkzeugPasswordHasher
from cookieauth.application.use_cases.users.login_user import LoginUserUseCase
from cookieauth.application.use_cases.users.logout_user import LogoutUserUseCase
from cookieauth.application.use_cases.users.resolve_session import ResolveSessionUseCase
from cookieauth.application.use_cases.users.signup_user import SignupUserUseCase
from cookieauth.infrastructure.stores.credential_store import InMemoryCredentialStore
from cookieauth.infrastructure.stores.session_store import InMemorySessionStore
from cookieauth.interfaces.http.controllers.auth_controller import AuthController
from cookieauth.interfaces.http.cookies import SessionCookie
from cookieauth.shared.config import AppConfig, load_config


class Container:
    """Owns the process-wide store instances and everything wired to them."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher.from_config(self.config.security)

    @cached_property
    def credential_store(self) -> InMemoryCredentialStore:
        return InMemoryCredentialStore(self.password_hasher)

    @cached_property
    def session_store(self) -> InMemorySessionStore:
        return InMemorySessionStore(max_age=self.config.session.max_age)

    @cached_property
    def session_cookie(self) -> SessionCookie:
        return SessionCookie.from_config(self.config)

    @cached_property
    def signup_user_use_case(self) -> SignupUserUseCase:
        return SignupUserUseCase(users=self.credential_store, sessions=self.session_store)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(users=self.credential_store, sessions=self.session_store)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_store)

    @cached_property
    def resolve_session_use_case(self) -> ResolveSessionUseCase:
        return ResolveSessionUseCase(users=self.credential_store, sessions=self.session_store)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            signup_use_case=self.signup_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            resolve_session_use_case=self.resolve_session_use_case,
            sessions=self.session_store,
            cookie=self.session_cookie,
        )
