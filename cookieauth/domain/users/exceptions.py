# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from cookieauth.shared.errors.base import AuthErrorCode, DomainError


class EmailAlreadyRegisteredError(DomainError):
    code = AuthErrorCode.EMAIL_ALREADY_REGISTERED.value
    status = HTTPStatus.CONFLICT


class PasswordMismatchError(DomainError):
    code = AuthErrorCode.PASSWORD_MISMATCH.value
    status = HTTPStatus.BAD_REQUEST


class IncorrectCredentialsError(DomainError):
    """Raised for an unknown email and for a wrong password alike."""

    code = AuthErrorCode.INCORRECT_CREDENTIALS.value
    status = HTTPStatus.UNAUTHORIZED


class UserNotFoundError(DomainError):
    code = AuthErrorCode.USER_NOT_FOUND.value
    status = HTTPStatus.NOT_FOUND
