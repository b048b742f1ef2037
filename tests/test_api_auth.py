"""Tests for authentication, registration and profile endpoints."""
from app.auth.tokens import get_token_service
from app.models import User

from conftest import ADMIN, bearer


def login(client, email, password):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_register_creates_admin_and_returns_token(client):
    response = client.post("/api/auth/register", json=ADMIN)

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["role"] == "admin"
    assert body["user"]["email"] == ADMIN["email"]
    assert "password" not in body["user"]
    assert get_token_service().verify(body["token"]) == body["user"]["id"]


def test_register_duplicate_email(client, admin_token):
    response = client.post("/api/auth/register", json={**ADMIN, "email": "ADMIN@example.com "})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "user_exists"


def test_register_duplicate_missed_by_lookup(client, admin_token, monkeypatch):
    monkeypatch.setattr("app.services.users.find_by_email", lambda db, email: None)

    response = client.post("/api/auth/register", json=ADMIN)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "user_exists"


def test_register_collects_validation_errors(client):
    response = client.post("/api/auth/register", json={"email": "bad", "password": "123"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert {d["field"] for d in error["details"]} == {"name", "email", "password"}


def test_password_is_stored_hashed(client, admin_token, session_factory):
    with session_factory() as db:
        user = db.query(User).filter(User.email == ADMIN["email"]).one()
        assert user.password_hash != ADMIN["password"]
        assert user.password_hash.startswith("$2")


def test_login_token_verifies_to_user_id(client, admin_token):
    response = login(client, ADMIN["email"], ADMIN["password"])

    assert response.status_code == 200
    body = response.json()
    assert set(body["user"]) == {"id", "name", "email", "role"}
    assert get_token_service().verify(body["token"]) == body["user"]["id"]


def test_login_records_last_login(client, admin_token):
    login(client, ADMIN["email"], ADMIN["password"])
    profile = client.get("/api/auth/profile", headers=bearer(admin_token)).json()
    assert profile["lastLogin"] is not None


def test_login_failures_are_indistinguishable(client, admin_token):
    wrong_password = login(client, ADMIN["email"], "not-the-password")
    unknown_email = login(client, "nobody@example.com", ADMIN["password"])

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"]["code"] == "invalid_credentials"


def test_login_requires_email_and_password(client):
    response = client.post("/api/auth/login", json={})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert [d["field"] for d in error["details"]] == ["email", "password"]


def test_profile_requires_token(client):
    response = client.get("/api/auth/profile")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "unauthorized"


def test_profile_rejects_non_bearer_scheme(client, admin_token):
    response = client.get("/api/auth/profile", headers={"Authorization": f"Basic {admin_token}"})
    assert response.status_code == 401


def test_profile_rejects_invalid_token(client):
    response = client.get("/api/auth/profile", headers=bearer("garbage.token.value"))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "unauthorized"


def test_token_of_deleted_user_fails_closed(client, admin_token, session_factory):
    with session_factory() as db:
        db.query(User).delete()
        db.commit()

    response = client.get("/api/auth/profile", headers=bearer(admin_token))
    assert response.status_code == 401


def test_get_profile(client, admin_headers):
    response = client.get("/api/auth/profile", headers=admin_headers)

    assert response.status_code == 200
    assert set(response.json()) == {"id", "name", "email", "role", "lastLogin"}


def test_update_profile_changes_name_and_password(client, admin_headers):
    response = client.put(
        "/api/auth/profile",
        json={"name": "Ana Admin", "password": "new-secret"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Ana Admin"
    assert login(client, ADMIN["email"], "new-secret").status_code == 200
    assert login(client, ADMIN["email"], ADMIN["password"]).status_code == 401


def test_update_profile_email_collision(client, admin_headers, editor_headers):
    response = client.put("/api/auth/profile", json={"email": "editor@example.com"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "user_exists"


def test_update_profile_email_collision_missed_by_lookup(client, admin_headers, editor_headers, monkeypatch):
    monkeypatch.setattr("app.services.users.find_by_email", lambda db, email: None)

    response = client.put("/api/auth/profile", json={"email": "editor@example.com"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "user_exists"
    assert client.get("/api/auth/profile", headers=admin_headers).json()["email"] == ADMIN["email"]


def test_update_profile_validates_email(client, admin_headers):
    response = client.put("/api/auth/profile", json={"email": "not-an-email"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "email"


def test_reset_password_known_and_unknown_email(client, admin_token):
    assert client.post("/api/auth/reset-password", json={"email": ADMIN["email"]}).status_code == 200

    response = client.post("/api/auth/reset-password", json={"email": "ghost@example.com"})
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"
