from datetime import timedelta

from curacadet.core.security import create_access_token
from tests.factories import make_user


def test_register_defaults_role_to_user(client):
    response = client.post("/api/auth/register", json={"username": "rmo", "password": "rmo@ota"})

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "user"


def test_open_registration_can_choose_super_admin(client):
    response = client.post(
        "/api/auth/register", json={"username": "sysadmin", "password": "s3cret", "role": "super_admin"}
    )

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "super_admin"


def test_register_rejects_duplicate_username(client, db):
    make_user(db, "rmo")

    response = client.post("/api/auth/register", json={"username": "rmo", "password": "x"})

    assert response.status_code == 409
    assert response.json() == {"error": "Username already exists"}


def test_register_requires_username_and_password(client):
    response = client.post("/api/auth/register", json={"username": "rmo"})

    assert response.status_code == 400
    assert response.json()["error"] == "Username and password are required"


def test_register_rejects_unknown_role(client):
    response = client.post(
        "/api/auth/register", json={"username": "x", "password": "y", "role": "commandant"}
    )

    assert response.status_code == 400


def test_login_returns_token_usable_on_protected_routes(client, db):
    make_user(db, "na", role="admin", password="na @ota")

    response = client.post("/api/auth/login", json={"username": "na", "password": "na @ota"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "admin"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "na"


def test_login_with_wrong_password(client, db):
    make_user(db, "na", password="right")

    response = client.post("/api/auth/login", json={"username": "na", "password": "wrong"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_missing_token_is_rejected(client):
    response = client.get("/api/cadets")

    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}


def test_expired_token_is_rejected(client, db):
    user = make_user(db, "old")
    token = create_access_token(data={"sub": user.username}, expires_delta=timedelta(minutes=-5))

    response = client.get("/api/cadets", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired token"}


def test_garbage_token_is_rejected(client):
    response = client.get("/api/cadets", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_role_gate_blocks_insufficient_role(client, headers_for):
    response = client.post(
        "/api/admin/database/execute",
        json={"query": "SELECT 1"},
        headers=headers_for("admin"),
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Insufficient permissions"}


def test_cadet_creation_is_admin_only(client, headers_for):
    response = client.post(
        "/api/cadets",
        json={"name": "A", "battalion": "B", "company": "C", "join_date": "2025-06-15T00:00:00"},
        headers=headers_for("user"),
    )

    assert response.status_code == 403
