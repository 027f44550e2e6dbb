"""
Tests for authentication (passwords, JWT sessions, auth routes).
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import jwt
import pytest
from fastapi import HTTPException

from backend import config
from backend.auth import hash_password, issue_session, read_session, verify_password
from backend.models.user import User
from backend.routes import auth_routes


def _user_with_password(password: str) -> User:
    return User(
        id=uuid4(),
        username="grace",
        password_hash=hash_password(password),
        created_at=datetime.now(UTC),
    )


# ============================================================================
# Passwords and tokens
# ============================================================================


class TestPasswords:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("correct horse")
        assert hashed != "correct horse"
        assert hashed.startswith("$2")

    def test_verify_roundtrip(self):
        hashed = hash_password("correct horse")
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_malformed_hash_never_matches(self):
        assert not verify_password("anything", "not-a-real-hash")


class TestSessionToken:
    """Session token issuance and verification."""

    def test_roundtrip(self, test_user):
        token = issue_session(test_user)
        assert read_session(token) == test_user.id

        claims = jwt.decode(token, config.settings.JWT_SECRET, algorithms=[config.settings.JWT_ALGORITHM])
        assert claims["name"] == "ada"

    def test_expired(self):
        claims = {
            "sub": str(uuid4()),
            "exp": datetime.now(UTC) - timedelta(hours=1),
            "iat": datetime.now(UTC) - timedelta(hours=2),
        }
        token = jwt.encode(claims, config.settings.JWT_SECRET, algorithm=config.settings.JWT_ALGORITHM)

        with pytest.raises(HTTPException) as exc_info:
            read_session(token)

        assert exc_info.value.status_code == 401
        assert "expired" in exc_info.value.detail.lower()

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "exp": datetime.now(UTC) + timedelta(hours=1)},
            "some-other-secret",
            algorithm="HS256",
        )

        with pytest.raises(HTTPException) as exc_info:
            read_session(token)

        assert exc_info.value.status_code == 401

    def test_subject_must_be_uuid(self):
        token = jwt.encode(
            {"sub": "ada", "exp": datetime.now(UTC) + timedelta(hours=1)},
            config.settings.JWT_SECRET,
            algorithm=config.settings.JWT_ALGORITHM,
        )

        with pytest.raises(HTTPException) as exc_info:
            read_session(token)

        assert exc_info.value.status_code == 401


# ============================================================================
# Register / login / logout
# ============================================================================


class TestRegister:
    async def test_register_sets_session(self, async_client, test_user):
        with patch.object(auth_routes.user_repo, "create", AsyncMock(return_value=test_user)) as create:
            res = await async_client.post("/auth/register", json={"username": "ada", "password": "s3cret-pass"})

        assert res.status_code == 201
        assert res.json()["username"] == "ada"
        assert "password_hash" not in res.json()
        assert "session=" in res.headers["set-cookie"]
        assert "httponly" in res.headers["set-cookie"].lower()

        username, password_hash = create.await_args.args
        assert username == "ada"
        assert verify_password("s3cret-pass", password_hash)

    async def test_register_taken_username(self, async_client):
        with patch.object(auth_routes.user_repo, "create", AsyncMock(return_value=None)):
            res = await async_client.post("/auth/register", json={"username": "ada", "password": "s3cret-pass"})

        assert res.status_code == 409

    async def test_register_short_password(self, async_client):
        res = await async_client.post("/auth/register", json={"username": "ada", "password": "short"})
        assert res.status_code == 422

    async def test_register_rejects_unknown_fields(self, async_client):
        res = await async_client.post(
            "/auth/register",
            json={"username": "ada", "password": "s3cret-pass", "admin": True},
        )
        assert res.status_code == 422


class TestLogin:
    async def test_login_success(self, async_client):
        user = _user_with_password("s3cret-pass")
        with patch.object(auth_routes.user_repo, "get_by_username", AsyncMock(return_value=user)):
            res = await async_client.post("/auth/login", json={"username": "grace", "password": "s3cret-pass"})

        assert res.status_code == 200
        assert res.json()["id"] == str(user.id)
        assert "session=" in res.headers["set-cookie"]

    async def test_login_wrong_password(self, async_client):
        user = _user_with_password("s3cret-pass")
        with patch.object(auth_routes.user_repo, "get_by_username", AsyncMock(return_value=user)):
            res = await async_client.post("/auth/login", json={"username": "grace", "password": "nope-nope"})

        assert res.status_code == 401
        assert "set-cookie" not in res.headers

    async def test_login_unknown_user(self, async_client):
        with patch.object(auth_routes.user_repo, "get_by_username", AsyncMock(return_value=None)):
            res = await async_client.post("/auth/login", json={"username": "nobody", "password": "whatever1"})

        assert res.status_code == 401

    async def test_login_rate_limited_per_ip(self, async_client):
        with (
            patch.object(config.settings, "LOGIN_RATE_LIMIT_PER_IP", 2),
            patch.object(auth_routes.user_repo, "get_by_username", AsyncMock(return_value=None)),
        ):
            for _ in range(2):
                res = await async_client.post("/auth/login", json={"username": "x", "password": "y"})
                assert res.status_code == 401

            res = await async_client.post("/auth/login", json={"username": "x", "password": "y"})

        assert res.status_code == 429
        assert res.headers["retry-after"] == "900"


class TestSession:
    async def test_me_without_cookie(self, async_client):
        res = await async_client.get("/auth/me")
        assert res.status_code == 401

    async def test_me_with_valid_cookie(self, async_client, test_user):
        token = issue_session(test_user)
        with patch("backend.auth.user_repo.get", AsyncMock(return_value=test_user)):
            res = await async_client.get("/auth/me", cookies={"session": token})

        assert res.status_code == 200
        assert res.json()["username"] == test_user.username
        assert res.json()["has_github_token"] is False

    async def test_me_with_garbage_cookie(self, async_client):
        res = await async_client.get("/auth/me", cookies={"session": "not-a-jwt"})
        assert res.status_code == 401

    async def test_me_for_deleted_user(self, async_client, test_user):
        token = issue_session(test_user)
        with patch("backend.auth.user_repo.get", AsyncMock(return_value=None)):
            res = await async_client.get("/auth/me", cookies={"session": token})

        assert res.status_code == 401

    async def test_logout_expires_cookie(self, async_client):
        res = await async_client.post("/auth/logout")

        assert res.status_code == 200
        assert "max-age=0" in res.headers["set-cookie"].lower()
