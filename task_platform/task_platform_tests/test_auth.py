from datetime import timedelta

import jwt

from task_platform.task_platform.task_service.auth import create_access_token
from task_platform.task_platform.task_service.config import settings
from task_platform.task_platform.task_service.models import User

from .conftest import auth_header, register, unique_email


def test_register_and_login(client):
    email = unique_email()
    password = "testing12345"

    register_response = client.post("/auth/register", json={"email": email, "password": password})
    assert register_response.status_code == 201
    body = register_response.json()
    assert body["message"] == "User registered successfully"
    assert body["token"]
    assert body["user"]["email"] == email
    assert body["user"]["role"] == "user"
    assert "password" not in body["user"]

    login = client.post("/auth/login", json={"email": email, "password": password})
    assert login.status_code == 200
    assert login.json()["message"] == "Login successful"
    assert login.json()["user"]["id"] == body["user"]["id"]

    # The login token is accepted by a protected route
    me = client.get("/auth/me", headers=auth_header(login.json()["token"]))
    assert me.status_code == 200
    assert me.json()["user"]["email"] == email


def test_register_normalizes_email(client):
    data = register(client, email="  Mixed.Case@Example.COM ")
    assert data["user"]["email"] == "mixed.case@example.com"

    # Login is case-insensitive on the email as well
    login = client.post("/auth/login", json={"email": "MIXED.case@example.com", "password": "secret123"})
    assert login.status_code == 200


def test_register_missing_fields(client):
    response = client.post("/auth/register", json={"email": unique_email()})
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"
    assert any("password" in detail for detail in response.json()["details"])


def test_register_short_password(client):
    response = client.post("/auth/register", json={"email": unique_email(), "password": "12345"})
    assert response.status_code == 400


def test_register_unknown_role(client):
    response = client.post(
        "/auth/register", json={"email": unique_email(), "password": "secret123", "role": "superuser"}
    )
    assert response.status_code == 400


def test_register_duplicate_email(client):
    email = unique_email()
    register(client, email=email)

    duplicate = client.post("/auth/register", json={"email": email.upper(), "password": "another123"})
    assert duplicate.status_code == 400
    assert duplicate.json()["error"] == "User with this email already exists"


def test_register_stores_hashed_password(client):
    email = unique_email()
    register(client, email=email, password="plaintext99")

    stored = client.portal.call(User.find_one, User.email == email)
    assert stored.password != "plaintext99"
    assert stored.password.startswith("$pbkdf2-sha256$")


def test_login_invalid_password(client):
    email = unique_email()
    register(client, email=email, password="goodpassword")

    bad_login = client.post("/auth/login", json={"email": email, "password": "wrongpassword"})
    assert bad_login.status_code == 401
    assert bad_login.json() == {"error": "Invalid email or password"}


def test_login_unknown_email(client):
    response = client.post("/auth/login", json={"email": unique_email(), "password": "whatever1"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid email or password"


def test_me_requires_token(client):
    response = client.get("/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "Access denied. No token provided."


def test_me_rejects_non_bearer_scheme(client, user_token):
    response = client.get("/auth/me", headers={"Authorization": f"Basic {user_token}"})
    assert response.status_code == 401


def test_expired_token_rejected(client):
    data = register(client)
    stored = client.portal.call(User.find_one, User.email == data["user"]["email"])
    expired = create_access_token(stored, expires_delta=timedelta(seconds=-10))

    response = client.get("/auth/me", headers=auth_header(expired))
    assert response.status_code == 401
    assert response.json()["error"] == "Token expired"


def test_tampered_token_rejected(client, user_token):
    header, payload, signature = user_token.split(".")
    forged_signature = ("A" if signature[0] != "A" else "B") + signature[1:]
    tampered = ".".join([header, payload, forged_signature])

    response = client.get("/auth/me", headers=auth_header(tampered))
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_token_signed_with_other_secret_rejected(client, user_token):
    claims = jwt.decode(user_token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    foreign = jwt.encode(claims, "not-the-server-secret", algorithm="HS256")

    response = client.get("/profile", headers=auth_header(foreign))
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_garbage_token_rejected(client):
    response = client.get("/auth/me", headers=auth_header("not-a-jwt"))
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_me_for_deleted_user(client, admin_token):
    data = register(client)
    deleted = client.delete(f"/users/{data['user']['id']}", headers=auth_header(admin_token))
    assert deleted.status_code == 200

    # Token is still valid, but the account is gone
    response = client.get("/auth/me", headers=auth_header(data["token"]))
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"
