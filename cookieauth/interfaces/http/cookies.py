# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from flask import Request, Response

from cookieauth.shared.config import AppConfig


@dataclass(slots=True, frozen=True)
class SessionCookie:
    """Reads and writes the session cookie. Always ``HttpOnly``."""

    name: str = "session"
    max_age: int = 300
    secure: bool = False
    samesite: str = "Lax"

    @classmethod
    def from_config(cls, config: AppConfig) -> SessionCookie:
        return cls(
            name=config.session.cookie_name,
            max_age=config.session.max_age,
            secure=config.cookie_secure(),
            samesite=config.session.cookie_samesite,
        )

    def read(self, request: Request) -> str | None:
        return request.cookies.get(self.name) or None

    def issue(self, response: Response, token: str) -> None:
        self._set(response, token, self.max_age)

    def refresh(self, response: Response, token: str) -> None:
        self._set(response, token, self.max_age)

    def expire(self, response: Response, token: str) -> None:
        self._set(response, token, -1)

    def _set(self, response: Response, token: str, max_age: int) -> None:
        response.set_cookie(
            self.name,
            token,
            max_age=max_age,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )
