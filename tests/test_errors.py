# tests/test_errors.py
"""Tests for the JSON error envelope."""

from unittest.mock import patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from blogdesk.core.settings import settings
from blogdesk.repositories.post_repo import PostRepository

DB_FAILURE = OperationalError("SELECT 1", {}, Exception("connection lost"))


@pytest.fixture()
def lenient_client(app):
    with TestClient(app, base_url="http://test", raise_server_exceptions=False) as test_client:
        yield test_client


def test_unknown_route(client) -> None:
    response = client.get("/api/does-not-exist")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Route not found"}


def test_wrong_method(client) -> None:
    response = client.patch("/api/posts")
    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert "error" in response.json()


def test_validation_error_names_the_field(client) -> None:
    response = client.post("/api/auth/login", json={"email": "a@example.com"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error"].startswith("Invalid password")
    assert data["details"]


def test_database_error_is_reported(client) -> None:
    with patch.object(PostRepository, "list_by_status", side_effect=DB_FAILURE):
        response = client.get("/api/posts")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    data = response.json()
    assert data["error"] == "Database error"
    assert "connection lost" in data["details"]
    assert "stack" in data


def test_database_error_hides_internals_in_production(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "environment", "production")
    with patch.object(PostRepository, "list_by_status", side_effect=DB_FAILURE):
        response = client.get("/api/posts")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Database error"}


def test_unexpected_error_is_reported(lenient_client) -> None:
    with patch.object(PostRepository, "list_by_status", side_effect=RuntimeError("boom")):
        response = lenient_client.get("/api/posts")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    data = response.json()
    assert data["error"] == "boom"
    assert "RuntimeError" in data["stack"]


def test_unexpected_error_in_production(lenient_client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "environment", "production")
    with patch.object(PostRepository, "list_by_status", side_effect=RuntimeError("boom")):
        response = lenient_client.get("/api/posts")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error"}


def test_not_found_body_has_no_details_in_production(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "environment", "production")
    response = client.get("/api/posts/post:missing")
    assert response.json() == {"error": "Blog post not found"}
