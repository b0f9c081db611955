"""
Tests for registration, form login and the protected user API.
"""

from todo_app.config import settings
from todo_app.utils.auth import create_access_token


def _register(client, username="alice", email="alice@example.com", password="s3cret-pw"):
    return client.post(
        "/register", json={"username": username, "email": email, "password": password}
    )


def _login(client, username="alice", password="s3cret-pw"):
    return client.post(
        "/login",
        data={"username": username, "password": password},
        follow_redirects=False,
    )


def _signed_in(client):
    _register(client)
    response = _login(client)
    assert response.status_code == 303
    return client


def test_register_returns_user_without_password(client):
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "alice"
    assert body["roles"] == "ROLE_USER"
    assert "password" not in body
    assert "hashed_password" not in body


def test_register_duplicate_username_is_a_conflict(client):
    _register(client)

    response = _register(client, email="second@example.com")

    assert response.status_code == 409
    assert response.json()["detail"] == "Username already exists"


def test_register_rejects_malformed_email(client):
    response = _register(client, email="not-an-email")

    assert response.status_code == 422


def test_user_api_requires_session(client):
    response = client.get("/api/users/all")

    assert response.status_code == 401


def test_non_api_pages_redirect_to_login(client):
    response = client.get("/docs", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_login_page_is_public(client):
    response = client.get("/login")

    assert response.status_code == 200
    assert "<form" in response.text


def test_login_success_sets_session_cookie(client):
    _register(client)

    response = _login(client)

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert settings.session_cookie_name in response.cookies


def test_login_failure_redirects_with_error(client):
    _register(client)

    response = _login(client, password="wrong-password")

    assert response.status_code == 303
    assert response.headers["location"] == "/login?error"
    assert settings.session_cookie_name not in response.cookies


def test_missing_role_is_forbidden(client):
    token = create_access_token({"sub": "guest", "roles": ["ROLE_GUEST"]})
    client.cookies.set(settings.session_cookie_name, token)

    response = client.get("/api/users/all")

    assert response.status_code == 403


def test_tampered_token_is_rejected(client):
    client.cookies.set(settings.session_cookie_name, "not-a-jwt")

    assert client.get("/api/users/all").status_code == 401


def test_user_lookups(client):
    _signed_in(client)

    all_users = client.get("/api/users/all")
    assert all_users.status_code == 200
    user = all_users.json()[0]

    assert client.get(f"/api/users/{user['id']}").json()["username"] == "alice"
    assert client.get("/api/users/username/alice").json()["id"] == user["id"]
    assert client.get("/api/users/email/alice@example.com").json()["id"] == user["id"]
    assert client.get("/api/users/me").json()["id"] == user["id"]


def test_user_lookups_not_found(client):
    _signed_in(client)

    assert client.get("/api/users/username/nobody").status_code == 404
    assert client.get("/api/users/email/nobody@example.com").status_code == 404
    assert client.get("/api/users/email/not-an-email").status_code == 404
    assert (
        client.get("/api/users/00000000-0000-0000-0000-000000000000").status_code
        == 404
    )
    assert client.get("/api/users/abc").status_code == 404


def test_update_user_with_get_body(client):
    _signed_in(client)

    response = client.request(
        "GET",
        "/api/users/update",
        json={"username": "alice", "email": "alice@new.example.com"},
    )

    assert response.status_code == 200
    assert response.text == "User: alice updated successfully"
    assert (
        client.get("/api/users/username/alice").json()["email"]
        == "alice@new.example.com"
    )


def test_update_unknown_user_is_bad_request(client):
    _signed_in(client)

    response = client.put("/api/users/update", json={"username": "ghost"})

    assert response.status_code == 400
    assert response.text == "User not found"


def test_update_to_taken_email_is_bad_request(client):
    _signed_in(client)
    _register(client, username="bob", email="bob@example.com")

    response = client.put(
        "/api/users/update", json={"username": "bob", "email": "alice@example.com"}
    )

    assert response.status_code == 400
    assert response.text == "Email already exists"
    assert client.get("/api/users/username/bob").json()["email"] == "bob@example.com"


def test_delete_user(client):
    _signed_in(client)
    _register(client, username="bob", email="bob@example.com")

    response = client.delete("/api/users/username/bob")

    assert response.status_code == 200
    assert client.get("/api/users/username/bob").status_code == 404
    assert client.delete("/api/users/username/bob").status_code == 404


def test_logout_ends_session(client):
    _signed_in(client)
    assert client.get("/api/users/all").status_code == 200

    response = client.post("/logout", follow_redirects=False)

    assert response.status_code == 303
    assert client.get("/api/users/all").status_code == 401
