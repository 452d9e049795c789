"""Test registration and login end to end."""
from contextlib import asynccontextmanager

import jwt
import pytest
from sqlalchemy import func, select

import api.main as main
from core.database import init_db
from verticals.accounts.models.db_models import User


ALICE = {
    "username": "alice",
    "password": "p",
    "email": "a@x.com",
    "mobile_number": "+15550100",
}


async def _user_count(session_factory) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(User))
        return result.scalar()


@pytest.mark.asyncio
async def test_register_user(client, session_factory):
    resp = await client.post("/api/Auth/register", json=ALICE)
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "User registered successfully."
    assert body["id"] > 0
    assert await _user_count(session_factory) == 1


@pytest.mark.asyncio
async def test_register_stores_hash_not_password(client, session_factory):
    await client.post("/api/Auth/register", json=ALICE)
    async with session_factory() as session:
        user = (await session.execute(select(User))).scalar_one()
    assert user.password_hash != ALICE["password"]
    assert user.password_hash.startswith("$2")


@pytest.mark.asyncio
async def test_register_twice_rejected(client, session_factory):
    assert (await client.post("/api/Auth/register", json=ALICE)).status_code == 200
    resp = await client.post("/api/Auth/register", json=ALICE)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username or email already exists."
    assert await _user_count(session_factory) == 1


@pytest.mark.asyncio
async def test_register_duplicate_email_rejected(client, session_factory):
    await client.post("/api/Auth/register", json=ALICE)
    resp = await client.post(
        "/api/Auth/register", json={**ALICE, "username": "alice2"}
    )
    assert resp.status_code == 400
    assert await _user_count(session_factory) == 1


@pytest.mark.asyncio
async def test_register_invalid_email(client):
    resp = await client.post("/api/Auth/register", json={**ALICE, "email": "not-an-email"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_register_password_too_long(client):
    resp = await client.post("/api/Auth/register", json={**ALICE, "password": "x" * 73})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_login_returns_token(client):
    await client.post(
        "/api/Auth/register",
        json={"username": "testuser", "password": "password", "email": "t@example.com"},
    )
    resp = await client.post(
        "/api/Auth/login", json={"username": "testuser", "password": "password"}
    )
    assert resp.status_code == 200
    token = resp.json()["token"]

    claims = jwt.decode(token, options={"verify_signature": False})
    assert claims["sub"] == "testuser"
    assert claims["exp"] - claims["iat"] == 3600


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    await client.post(
        "/api/Auth/register",
        json={"username": "testuser", "password": "password", "email": "t@example.com"},
    )
    resp = await client.post(
        "/api/Auth/login", json={"username": "testuser", "password": "wrong"}
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_unknown_user(client):
    resp = await client.post(
        "/api/Auth/login", json={"username": "ghost", "password": "password"}
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_login_token_opens_book_endpoints(client):
    await client.post("/api/Auth/register", json=ALICE)
    resp = await client.post(
        "/api/Auth/login", json={"username": "alice", "password": "p"}
    )
    token = resp.json()["token"]
    resp = await client.get("/api/Book", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_health_and_request_id(client):
    resp = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.headers["x-request-id"] == "abc123"

    resp = await client.get("/")
    assert resp.headers["x-request-id"]


@pytest.mark.asyncio
async def test_login_rejects_password_sharing_72_byte_prefix(client):
    password = "p" * 72
    resp = await client.post("/api/Auth/register", json={**ALICE, "password": password})
    assert resp.status_code == 200

    resp = await client.post(
        "/api/Auth/login", json={"username": "alice", "password": password + "DIFFERENT"}
    )
    assert resp.status_code == 401

    resp = await client.post(
        "/api/Auth/login", json={"username": "alice", "password": password}
    )
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_seed_user_can_log_in_after_startup(client, engine, session_factory, monkeypatch):
    @asynccontextmanager
    async def session_context():
        async with session_factory() as session:
            yield session
            await session.commit()

    async def create_tables():
        await init_db(engine)

    async def keep_engine():
        pass

    monkeypatch.setattr(main, "setup_logging", lambda *args: None)
    monkeypatch.setattr(main, "init_db", create_tables)
    monkeypatch.setattr(main, "get_session_context", session_context)
    monkeypatch.setattr(main, "close_db", keep_engine)

    async with main.lifespan(main.app):
        resp = await client.post(
            "/api/Auth/login", json={"username": "testuser", "password": "password"}
        )

    assert resp.status_code == 200
    claims = jwt.decode(resp.json()["token"], options={"verify_signature": False})
    assert claims["sub"] == "testuser"
    assert await _user_count(session_factory) == 1
