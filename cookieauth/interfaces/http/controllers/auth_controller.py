# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, redirect, request, url_for
from pydantic import ValidationError

from cookieauth.application.use_cases.users.login_user import LoginUserUseCase
from cookieauth.application.use_cases.users.logout_user import LogoutUserUseCase
from cookieauth.application.use_cases.users.resolve_session import ResolveSessionUseCase
from cookieauth.application.use_cases.users.signup_user import SignupUserUseCase
from cookieauth.domain.sessions.exceptions import SessionExpiredError, SessionNotFoundError
from cookieauth.domain.sessions.repositories import SessionStore
from cookieauth.domain.users.exceptions import IncorrectCredentialsError, UserNotFoundError
from cookieauth.infrastructure.audit import AuditAction, audit_log
from cookieauth.interfaces.http.cookies import SessionCookie
from cookieauth.interfaces.http.dto.auth import (
    AccountDTO,
    AuthSuccessDTO,
    IndexDTO,
    LoginRequestDTO,
    SessionDTO,
    SignupRequestDTO,
    UserDTO,
)
from cookieauth.shared.errors import UnauthorizedError
from cookieauth.shared.errors.validation import raise_validation_error
from cookieauth.shared.logging import logger

_REJECTED = (SessionNotFoundError, SessionExpiredError, UserNotFoundError)


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _request_payload() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


class AuthController:
    def __init__(
        self,
        *,
        signup_use_case: SignupUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        resolve_session_use_case: ResolveSessionUseCase,
        sessions: SessionStore,
        cookie: SessionCookie,
    ) -> None:
        self._signup_use_case = signup_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._resolve_session_use_case = resolve_session_use_case
        self._sessions = sessions
        self._cookie = cookie

    def index(self) -> Response:
        token = self._cookie.read(request)
        try:
            user, session = self._resolve_session_use_case.execute(token)
        except _REJECTED:
            return jsonify(IndexDTO(is_logged_in=False).model_dump(mode="json"))

        payload = IndexDTO(
            is_logged_in=True,
            user=UserDTO.model_validate(user),
            session=SessionDTO.from_session(session, self._sessions.max_age),
        )
        response = jsonify(payload.model_dump(mode="json"))
        self._cookie.refresh(response, token)
        return response

    def signup(self) -> Response | tuple[Response, int]:
        redirect_response = self._redirect_if_authenticated()
        if redirect_response is not None:
            return redirect_response

        try:
            dto = SignupRequestDTO.model_validate(_request_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._signup_use_case.execute(
            dto.email, dto.first_name, dto.last_name, dto.password, dto.confirm_password
        )

        audit_log(AuditAction.SIGNUP, user_id=user.id, ip_address=_get_client_ip())

        response = jsonify(AuthSuccessDTO.for_user(user).model_dump(mode="json"))
        self._cookie.issue(response, token)
        logger.info(f"auth.signup: ok user_id={user.id}")
        return response, 201

    def login(self) -> Response | tuple[Response, int]:
        redirect_response = self._redirect_if_authenticated()
        if redirect_response is not None:
            return redirect_response

        try:
            dto = LoginRequestDTO.model_validate(_request_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()
        try:
            user, token = self._login_use_case.execute(dto.email, dto.password)
        except IncorrectCredentialsError:
            audit_log(AuditAction.LOGIN_FAILED, ip_address=ip_address, success=False)
            raise

        audit_log(AuditAction.LOGIN_SUCCESS, user_id=user.id, ip_address=ip_address)

        response = jsonify(AuthSuccessDTO.for_user(user).model_dump(mode="json"))
        self._cookie.issue(response, token)
        logger.info(f"auth.login: ok user_id={user.id}")
        return response, 200

    def logout(self) -> Response | tuple[Response, int]:
        token = self._cookie.read(request)
        if not self._sessions.is_authenticated(token):
            return redirect(url_for("auth.index"), code=303)

        self._logout_use_case.execute(token)
        audit_log(AuditAction.LOGOUT, ip_address=_get_client_ip())

        response = jsonify({"ok": True})
        self._cookie.expire(response, token)
        logger.info("auth.logout: ok")
        return response, 200

    def account(self) -> Response | tuple[Response, int]:
        token = self._cookie.read(request)
        try:
            user, session = self._resolve_session_use_case.execute(token)
        except _REJECTED as exc:
            rejection = UnauthorizedError()
            response = jsonify(rejection.to_dict())
            if token:
                audit_log(
                    AuditAction.SESSION_REJECTED,
                    ip_address=_get_client_ip(),
                    details={"reason": exc.code},
                    success=False,
                )
                self._cookie.expire(response, token)
            return response, rejection.status

        payload = AccountDTO(
            user=UserDTO.model_validate(user),
            session=SessionDTO.from_session(session, self._sessions.max_age),
        )
        response = jsonify(payload.model_dump(mode="json"))
        self._cookie.refresh(response, token)
        return response

    def _redirect_if_authenticated(self) -> Response | None:
        token = self._cookie.read(request)
        if not self._sessions.is_authenticated(token):
            return None
        response = redirect(url_for("auth.account"), code=303)
        self._cookie.refresh(response, token)
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/", view_func=self.index, methods=["GET"])
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST", "DELETE"])
        bp.add_url_rule("/account", view_func=self.account, methods=["GET"])
        return bp
