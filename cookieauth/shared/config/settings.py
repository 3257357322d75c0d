# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV = dict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


def _parse_bool(value: str | bool | None) -> bool | None:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class SessionConfig(BaseSettings):
    max_age: int = Field(300, ge=1, alias="MAX_SESSION_AGE")
    cookie_name: str = Field("session", min_length=1, alias="SESSION_COOKIE_NAME")
    # None means "secure in production only"
    cookie_secure: bool | None = Field(None, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")

    model_config = SettingsConfigDict(**_ENV)

    @field_validator("cookie_secure", mode="before")
    @classmethod
    def _parse_secure(cls, value: str | bool | None) -> bool | None:
        return _parse_bool(value)

    @field_validator("cookie_samesite")
    @classmethod
    def _check_samesite(cls, value: str) -> str:
        normalized = value.capitalize()
        if normalized not in ("Strict", "Lax", "None"):
            raise ValueError("cookie_samesite must be Strict, Lax or None")
        return normalized


class SecurityConfig(BaseSettings):
    password_hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")
    password_salt_length: int = Field(16, ge=8, alias="PASSWORD_SALT_LENGTH")

    model_config = SettingsConfigDict(**_ENV)

    @field_validator("password_hash_method")
    @classmethod
    def _check_method(cls, value: str) -> str:
        if not value.startswith(("scrypt", "pbkdf2")):
            raise ValueError("password_hash_method must be a scrypt or pbkdf2 method")
        return value


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")

    session: SessionConfig = Field(default_factory=_session_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(**_ENV, validate_assignment=True)

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return bool(_parse_bool(value))

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", ""):
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY must be a strong random value in production.\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if self.session.cookie_secure is False:
            print(
                "\n⚠️  Session cookie Secure flag is DISABLED in production (use HTTPS!)\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def cookie_secure(self) -> bool:
        if self.session.cookie_secure is None:
            return self.is_production()
        return self.session.cookie_secure


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "SecurityConfig", "SessionConfig", "load_config"]
