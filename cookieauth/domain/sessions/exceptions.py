# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from cookieauth.shared.errors.base import AuthErrorCode, DomainError


class SessionNotFoundError(DomainError):
    code = AuthErrorCode.SESSION_NOT_FOUND.value
    status = HTTPStatus.UNAUTHORIZED


class SessionExpiredError(DomainError):
    code = AuthErrorCode.SESSION_EXPIRED.value
    status = HTTPStatus.UNAUTHORIZED
