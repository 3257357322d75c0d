from __future__ import annotations

from flask.testing import FlaskClient

from cookieauth.app import create_app
from cookieauth.infrastructure.container import Container
from cookieauth.shared.config import AppConfig
from cookieauth.shared.errors import UnauthorizedError

SIGNUP = {
    "email": "alice@example.com",
    "firstName": "Alice",
    "lastName": "Liddell",
    "password": "rabbit-hole",
    "confirmPassword": "rabbit-hole",
}


def _session_cookie_header(response) -> str:
    headers = [h for h in response.headers.getlist("Set-Cookie") if h.startswith("session=")]
    assert len(headers) == 1
    return headers[0]


def test_signup_sets_http_only_session_cookie(client: FlaskClient, container: Container) -> None:
    response = client.post("/signup", json=SIGNUP)

    assert response.status_code == 201
    payload = response.get_json()
    assert payload["ok"] is True
    assert payload["user"] == {
        "id": 1,
        "email": "alice@example.com",
        "first_name": "Alice",
        "last_name": "Liddell",
    }
    header = _session_cookie_header(response)
    assert "HttpOnly" in header
    assert "Max-Age=300" in header
    assert "Secure" not in header
    token = client.get_cookie("session").value
    assert container.session_store.get(token).user_id == 1


def test_signup_accepts_form_bodies(client: FlaskClient) -> None:
    response = client.post("/signup", data=SIGNUP)

    assert response.status_code == 201
    assert response.get_json()["user"]["first_name"] == "Alice"


def test_signup_password_mismatch(client: FlaskClient, container: Container) -> None:
    response = client.post("/signup", json={**SIGNUP, "confirmPassword": "different-one"})

    assert response.status_code == 400
    assert response.get_json() == {"error": "password_mismatch"}
    assert len(container.credential_store) == 0


def test_signup_duplicate_email_returns_conflict(client: FlaskClient) -> None:
    client.post("/signup", json=SIGNUP)
    client.delete_cookie("session")

    response = client.post("/signup", json=SIGNUP)

    assert response.status_code == 409
    assert response.get_json()["error"] == "email_already_registered"


def test_signup_invalid_payload_returns_422(client: FlaskClient) -> None:
    response = client.post("/signup", json={"email": "not-an-email"})

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "password" in payload["context"]["fields"]
    assert "email" not in payload["context"]["fields"]


def test_signup_accepts_whatever_the_store_accepts(client: FlaskClient, container: Container) -> None:
    response = client.post(
        "/signup",
        json={**SIGNUP, "email": "not-an-email", "password": "x", "confirmPassword": "x"},
    )

    assert response.status_code == 201
    assert container.credential_store.get(1).email == "not-an-email"


def test_signup_hashing_failure_returns_500(app_config: AppConfig, flaky_hasher) -> None:
    container = Container(app_config)
    container.password_hasher = flaky_hasher
    client = create_app(app_config, container).test_client()
    flaky_hasher.fail = True

    response = client.post("/signup", json=SIGNUP)

    assert response.status_code == 500
    assert response.get_json()["error"] == "password_hashing_failed"
    assert len(container.credential_store) == 0
    assert client.get_cookie("session") is None


def test_authenticated_user_is_redirected_from_signup_and_login(client: FlaskClient) -> None:
    client.post("/signup", json=SIGNUP)

    for path in ("/signup", "/login"):
        response = client.post(path, json=SIGNUP)
        assert response.status_code == 303
        assert response.headers["Location"].endswith("/account")


def test_login_sets_new_session_cookie(client: FlaskClient) -> None:
    client.post("/signup", json=SIGNUP)
    first_token = client.get_cookie("session").value
    client.delete_cookie("session")

    response = client.post(
        "/login", json={"email": "alice@example.com", "password": "rabbit-hole"}
    )

    assert response.status_code == 200
    assert response.get_json()["user"]["id"] == 1
    assert client.get_cookie("session").value != first_token


def test_login_failures_look_identical(client: FlaskClient) -> None:
    client.post("/signup", json=SIGNUP)
    client.delete_cookie("session")

    wrong_password = client.post(
        "/login", json={"email": "alice@example.com", "password": "nope"}
    )
    unknown_email = client.post(
        "/login", json={"email": "mallory@example.com", "password": "rabbit-hole"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.get_json() == unknown_email.get_json() == {
        "error": "incorrect_credentials"
    }


def test_account_requires_session(client: FlaskClient) -> None:
    response = client.get("/account")

    assert response.status_code == UnauthorizedError().status == 401
    assert response.get_json() == UnauthorizedError().to_dict() == {"error": "unauthorized"}
    assert not response.headers.getlist("Set-Cookie")


def test_account_returns_profile_and_refreshes_cookie(client: FlaskClient, clock) -> None:
    client.post("/signup", json=SIGNUP)
    clock.advance(120)

    response = client.get("/account")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["is_logged_in"] is True
    assert payload["user"]["email"] == "alice@example.com"
    assert payload["session"]["user_id"] == 1
    assert "Max-Age=300" in _session_cookie_header(response)


def test_account_rejects_expired_session(client: FlaskClient, container: Container, clock) -> None:
    client.post("/signup", json=SIGNUP)
    clock.advance(301)

    response = client.get("/account")

    assert response.status_code == 401
    assert "Max-Age=-1" in _session_cookie_header(response)
    assert len(container.session_store) == 0
    assert client.get_cookie("session").max_age == -1


def test_account_rejects_unknown_token(client: FlaskClient) -> None:
    client.set_cookie("session", "forged-token")

    response = client.get("/account")

    assert response.status_code == 401


def test_logout_deletes_session_and_expires_cookie(
    client: FlaskClient, container: Container
) -> None:
    client.post("/signup", json=SIGNUP)
    token = client.get_cookie("session").value

    response = client.post("/logout")

    assert response.status_code == 200
    header = _session_cookie_header(response)
    assert header.startswith(f"session={token}")
    assert "Max-Age=-1" in header
    assert len(container.session_store) == 0
    assert client.get("/account").status_code == 401


def test_logout_without_session_redirects_home(client: FlaskClient) -> None:
    response = client.delete("/logout")

    assert response.status_code == 303
    assert response.headers["Location"].endswith("/")


def test_index_reports_login_state(client: FlaskClient) -> None:
    assert client.get("/").get_json() == {"is_logged_in": False, "user": None, "session": None}

    client.post("/signup", json=SIGNUP)
    payload = client.get("/").get_json()

    assert payload["is_logged_in"] is True
    assert payload["user"]["id"] == 1
    assert payload["session"]["user_id"] == 1
    assert payload["session"]["expires_at"] > payload["session"]["refreshed_at"]
