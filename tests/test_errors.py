"""Tests for error mapping: unexpected failures still answer with {"error": ...}."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from repositories.user_repo import UserRepository
from repositories.word_repo import WordRepository
from tests.conftest import signup


def _database_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


@pytest.mark.asyncio
async def test_suggestion_storage_failure_is_json(server_error_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(WordRepository, "find_prefix", _database_down)
    resp = await server_error_client.get("/suggestions", params={"query": "ca", "language": "en"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Something went wrong"}


@pytest.mark.asyncio
async def test_signup_storage_failure_is_json(server_error_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(UserRepository, "create", _database_down)
    resp = await server_error_client.post(
        "/auth/signup",
        data={"email": "down@example.com", "password": "secret123", "name": "Down"},
    )
    assert resp.status_code == 500
    assert resp.json() == {"error": "Something went wrong"}


@pytest.mark.asyncio
async def test_login_storage_failure_is_json(server_error_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(UserRepository, "get_by_email", _database_down)
    resp = await server_error_client.post("/auth/login", data={"email": "a@example.com", "password": "secret123"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Something went wrong"}


@pytest.mark.asyncio
async def test_concurrent_signup_for_same_email(client: AsyncClient, monkeypatch):
    await signup(client, "race@example.com")
    client.cookies.clear()

    # the second request misses the existing row, as if both checked before either inserted
    monkeypatch.setattr(UserRepository, "get_by_email", lambda self, email: None)
    resp = await client.post(
        "/auth/signup",
        data={"email": "race@example.com", "password": "secret123", "name": "Again"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "User with this email already exists"}
