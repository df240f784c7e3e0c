# tests/test_auth_endpoints.py
"""Tests for registration, login and profile endpoints."""

from fastapi import status

TEST_PASSWORD = "password123"


def _register(client, email="new@example.com", password="s3cret-pass", name="New Reader"):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )


def test_register_creates_regular_user(client) -> None:
    response = _register(client)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "new@example.com"
    assert data["user"]["role"] == "user"
    assert data["user"]["id"].startswith("user:")
    assert "passwordHash" not in data["user"]
    assert "password_hash" not in data["user"]


def test_registered_token_works(client) -> None:
    token = _register(client).json()["token"]
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["email"] == "new@example.com"


def test_register_duplicate_email(client) -> None:
    _register(client)
    response = _register(client)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Email is already registered"


def test_register_rejects_bad_email(client) -> None:
    response = _register(client, email="not-an-email")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"].startswith("Invalid email")


def test_register_rejects_short_password(client) -> None:
    response = _register(client, password="short")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_login_success(client, reader) -> None:
    response = client.post(
        "/api/auth/login",
        json={"email": reader.email, "password": TEST_PASSWORD},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["id"] == reader.id


def test_login_wrong_password(client, reader) -> None:
    response = client.post(
        "/api/auth/login",
        json={"email": reader.email, "password": "wrong-password"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Invalid email or password"}


def test_login_unknown_email(client) -> None:
    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_requires_token(client) -> None:
    assert client.get("/api/auth/me").status_code == status.HTTP_401_UNAUTHORIZED


def test_update_profile_name(client, reader, reader_headers) -> None:
    response = client.put("/api/auth/me", json={"name": "Renamed"}, headers=reader_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Renamed"
    assert data["email"] == reader.email
    assert data["updatedAt"] is not None


def test_update_profile_password(client, reader, reader_headers) -> None:
    response = client.put(
        "/api/auth/me",
        json={"password": "brand-new-pass"},
        headers=reader_headers,
    )
    assert response.status_code == status.HTTP_200_OK

    login = client.post(
        "/api/auth/login",
        json={"email": reader.email, "password": "brand-new-pass"},
    )
    assert login.status_code == status.HTTP_200_OK
