from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from flask import Flask
from flask.testing import FlaskClient

from cookieauth.app import create_app
from cookieauth.application.services.password_hashing import WerkzeugPasswordHasher
from cookieauth.infrastructure.container import Container
from cookieauth.infrastructure.stores.credential_store import InMemoryCredentialStore
from cookieauth.infrastructure.stores.session_store import InMemorySessionStore
from cookieauth.shared.config import AppConfig, SecurityConfig, SessionConfig

# Cheap work factor so the suite stays fast; production uses scrypt.
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FlakyHasher:
    """Delegates to a real hasher until ``fail`` is switched on."""

    def __init__(self, inner: WerkzeugPasswordHasher) -> None:
        self._inner = inner
        self.fail = False

    @property
    def method(self) -> str:
        return self._inner.method

    def hash(self, password: str) -> str:
        if self.fail:
            raise MemoryError("out of memory")
        return self._inner.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._inner.verify(password, hashed)


@pytest.fixture()
def flaky_hasher(hasher: WerkzeugPasswordHasher) -> FlakyHasher:
    return FlakyHasher(hasher)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method=FAST_HASH_METHOD)


@pytest.fixture()
def credential_store(hasher: WerkzeugPasswordHasher, clock: FakeClock) -> InMemoryCredentialStore:
    return InMemoryCredentialStore(hasher, clock=clock)


@pytest.fixture()
def session_store(clock: FakeClock) -> InMemorySessionStore:
    return InMemorySessionStore(max_age=300, clock=clock)


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(
        app_env="test",
        secret_key="test",
        session=SessionConfig(max_age=300, cookie_secure=False, cookie_samesite="Lax"),
        security=SecurityConfig(password_hash_method=FAST_HASH_METHOD),
    )


@pytest.fixture()
def container(app_config: AppConfig, clock: FakeClock) -> Container:
    container = Container(app_config)
    container.session_store = InMemorySessionStore(
        max_age=app_config.session.max_age, clock=clock
    )
    return container


@pytest.fixture()
def flask_app(app_config: AppConfig, container: Container) -> Flask:
    app = create_app(app_config, container)
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(flask_app: Flask) -> FlaskClient:
    return flask_app.test_client()
