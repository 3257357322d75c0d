from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from cookieauth.domain.users.exceptions import (
    EmailAlreadyRegisteredError,
    IncorrectCredentialsError,
    PasswordMismatchError,
    UserNotFoundError,
)
from cookieauth.infrastructure.stores.credential_store import InMemoryCredentialStore
from cookieauth.shared.errors import PasswordHashingError


def _register(store: InMemoryCredentialStore, email: str = "alice@example.com") -> int:
    return store.register(email, "Alice", "Liddell", "rabbit-hole", "rabbit-hole")


def test_register_then_get_returns_supplied_profile(credential_store, clock) -> None:
    user_id = _register(credential_store)

    user = credential_store.get(user_id)

    assert user.id == user_id
    assert user.email == "alice@example.com"
    assert user.first_name == "Alice"
    assert user.last_name == "Liddell"
    assert user.display_name == "Alice Liddell"
    assert user.created_at == clock.now
    assert user.password_hash != "rabbit-hole"
    assert "rabbit-hole" not in user.password_hash
    assert user.password_hash.startswith("pbkdf2:sha256:1000$")


def test_user_ids_are_sequential(credential_store) -> None:
    ids = [_register(credential_store, f"user{i}@example.com") for i in range(3)]

    assert ids == [1, 2, 3]


def test_any_string_is_accepted_as_email(credential_store) -> None:
    user_id = credential_store.register("", "", "", "x", "x")

    assert credential_store.get(user_id).email == ""
    assert credential_store.login("", "x").id == user_id
    with pytest.raises(EmailAlreadyRegisteredError):
        credential_store.register("", "Other", "User", "y", "y")


def test_password_mismatch_inserts_nothing(credential_store) -> None:
    with pytest.raises(PasswordMismatchError) as exc_info:
        credential_store.register("bob@example.com", "Bob", "B", "one-password", "another")

    assert exc_info.value.code == "password_mismatch"
    assert len(credential_store) == 0


def test_duplicate_email_is_rejected(credential_store) -> None:
    _register(credential_store)

    with pytest.raises(EmailAlreadyRegisteredError):
        credential_store.check_email_exists("alice@example.com")
    with pytest.raises(EmailAlreadyRegisteredError):
        _register(credential_store)
    assert len(credential_store) == 1


def test_check_email_exists_passes_for_new_email(credential_store) -> None:
    assert credential_store.check_email_exists("nobody@example.com") is None


def test_email_is_compared_as_supplied(credential_store) -> None:
    first = _register(credential_store, "Alice@Example.com")
    second = _register(credential_store, "alice@example.com")

    assert first != second
    with pytest.raises(IncorrectCredentialsError):
        credential_store.login("ALICE@EXAMPLE.COM", "rabbit-hole")


def test_login_returns_registered_user(credential_store) -> None:
    user_id = _register(credential_store)

    user = credential_store.login("alice@example.com", "rabbit-hole")

    assert user.id == user_id


def test_login_failures_are_indistinguishable(credential_store) -> None:
    _register(credential_store)

    with pytest.raises(IncorrectCredentialsError) as wrong_password:
        credential_store.login("alice@example.com", "wrong")
    with pytest.raises(IncorrectCredentialsError) as unknown_email:
        credential_store.login("mallory@example.com", "rabbit-hole")

    assert type(wrong_password.value) is type(unknown_email.value)
    assert wrong_password.value.to_dict() == unknown_email.value.to_dict()


def test_get_unknown_user_raises(credential_store) -> None:
    with pytest.raises(UserNotFoundError):
        credential_store.get(42)


def test_hashing_failure_leaves_store_untouched(flaky_hasher) -> None:
    store = InMemoryCredentialStore(flaky_hasher)
    flaky_hasher.fail = True

    with pytest.raises(PasswordHashingError) as exc_info:
        _register(store)

    assert exc_info.value.status == 500
    assert len(store) == 0

    flaky_hasher.fail = False
    assert _register(store) == 1


def test_concurrent_double_registration_has_single_winner(credential_store) -> None:
    attempts = 16
    barrier = threading.Barrier(attempts)

    def attempt(_: int) -> int | None:
        barrier.wait()
        try:
            return _register(credential_store)
        except EmailAlreadyRegisteredError:
            return None

    with ThreadPoolExecutor(max_workers=attempts) as pool:
        results = list(pool.map(attempt, range(attempts)))

    winners = [r for r in results if r is not None]
    assert winners == [1]
    assert len(credential_store) == 1


def test_concurrent_registrations_get_unique_ids(credential_store) -> None:
    with ThreadPoolExecutor(max_workers=16) as pool:
        ids = list(
            pool.map(lambda i: _register(credential_store, f"user{i}@example.com"), range(200))
        )

    assert sorted(ids) == list(range(1, 201))
    for i, user_id in enumerate(ids):
        assert credential_store.get(user_id).email == f"user{i}@example.com"
