# Registration, login, token refresh and the bearer guard.

from datetime import timedelta

from petsitter.security_utils import create_jwt_token
from tests.api.support import PASSWORD, auth_headers, register_user


def test_register_returns_user_and_token_pair(client) -> None:
    response = client.post(
        "/api/auth/register",
        json={
            "email": "Jane@Example.com",
            "password": PASSWORD,
            "name": "Jane",
            "role": "SITTER",
            "phone": "+370 600 00000",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "jane@example.com"
    assert body["user"]["role"] == "SITTER"
    assert body["user"]["phone"] == "+37060000000"
    assert body["user"]["isEmailVerified"] is False
    assert body["accessToken"] and body["refreshToken"]
    assert "password" not in str(body["user"]).lower()


def test_register_duplicate_email_conflicts(client) -> None:
    payload = {"email": "dup@example.com", "password": PASSWORD, "name": "Dup", "role": "OWNER"}
    assert client.post("/api/auth/register", json=payload).status_code == 201

    response = client.post("/api/auth/register", json={**payload, "email": "DUP@example.com"})

    assert response.status_code == 409


def test_register_validates_input(client) -> None:
    base = {"email": "v@example.com", "password": PASSWORD, "name": "Val", "role": "OWNER"}

    assert client.post("/api/auth/register", json={**base, "password": "short"}).status_code == 422
    assert client.post("/api/auth/register", json={**base, "name": "V"}).status_code == 422
    assert client.post("/api/auth/register", json={**base, "name": " a "}).status_code == 422
    assert client.post("/api/auth/register", json={**base, "email": "not-an-email"}).status_code == 422
    assert client.post("/api/auth/register", json={**base, "role": "ADMIN"}).status_code == 422
    assert client.post("/api/auth/register", json={**base, "role": "KING"}).status_code == 422


def test_login_with_valid_and_invalid_credentials(client) -> None:
    body, _ = register_user(client, email="login@example.com")

    ok = client.post("/api/auth/login", json={"email": "LOGIN@example.com", "password": PASSWORD})
    wrong_password = client.post(
        "/api/auth/login", json={"email": "login@example.com", "password": "wrong-password"}
    )
    unknown = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": PASSWORD})

    assert ok.status_code == 200
    assert ok.json()["user"]["id"] == body["user"]["id"]
    assert wrong_password.status_code == 401
    assert unknown.status_code == 401
    assert wrong_password.json()["detail"] == unknown.json()["detail"]


def test_me_requires_bearer_token(client) -> None:
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Basic abc"}).status_code == 401


def test_me_returns_current_user(client) -> None:
    body, headers = register_user(client, name="Mia")

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    me = response.json()
    assert me["id"] == body["user"]["id"]
    assert me["name"] == "Mia"
    assert me["createdAt"] is not None


def test_expired_access_token_is_rejected(client) -> None:
    body, _ = register_user(client)
    token = create_jwt_token(
        {"sub": body["user"]["id"], "email": body["user"]["email"], "role": "OWNER", "type": "access"},
        expires_delta=timedelta(minutes=-5),
    )

    response = client.get("/api/auth/me", headers=auth_headers(token))

    assert response.status_code == 401
    assert response.headers.get("X-Token-Expired") == "true"


def test_refresh_token_cannot_be_used_as_access_token(client) -> None:
    body, _ = register_user(client)

    response = client.get("/api/auth/me", headers=auth_headers(body["refreshToken"]))

    assert response.status_code == 401


def test_refresh_issues_new_tokens(client) -> None:
    body, _ = register_user(client)

    response = client.post("/api/auth/refresh", json={"refreshToken": body["refreshToken"]})
    rejected = client.post("/api/auth/refresh", json={"refreshToken": body["accessToken"]})

    assert response.status_code == 200
    refreshed = response.json()
    assert refreshed["user"]["id"] == body["user"]["id"]
    assert client.get("/api/auth/me", headers=auth_headers(refreshed["accessToken"])).status_code == 200
    assert rejected.status_code == 401


def test_update_me_changes_contact_details(client) -> None:
    _, headers = register_user(client, name="Before")

    response = client.patch(
        "/api/auth/me",
        json={"name": "  After  ", "address": "Pilies g. 5", "phone": "8-600-12345"},
        headers=headers,
    )

    assert response.status_code == 200
    me = response.json()
    assert me["name"] == "After"
    assert me["address"] == "Pilies g. 5"
    assert me["phone"] == "860012345"
    assert client.patch("/api/auth/me", json={"name": "X"}, headers=headers).status_code == 422
    assert client.patch("/api/auth/me", json={"name": "  X  "}, headers=headers).status_code == 422


def test_blocked_user_cannot_authenticate(client, db) -> None:
    from petsitter.models import User

    body, headers = register_user(client, email="blocked@example.com")
    user = db.query(User).filter(User.id == body["user"]["id"]).one()
    user.is_blocked = True
    db.commit()

    assert client.get("/api/auth/me", headers=headers).status_code == 401
    login = client.post("/api/auth/login", json={"email": "blocked@example.com", "password": PASSWORD})
    assert login.status_code == 401


def test_health_endpoint(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"
