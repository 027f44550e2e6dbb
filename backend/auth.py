"""
Authentication for Studio.

Accounts are username + password (bcrypt). A successful login issues a signed
session token that travels in an HTTP-only cookie; every protected route
resolves it back to a User through get_current_user.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Annotated
from uuid import UUID

import bcrypt
import jwt
from fastapi import Cookie, HTTPException, status

from backend import config
from backend.models.user import User
from backend.repos.user_repo import UserRepo

user_repo = UserRepo()

SESSION_COOKIE = "session"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def issue_session(user: User) -> str:
    """Sign a session token for user, valid for JWT_EXPIRY_HOURS."""
    now = datetime.now(UTC)
    claims = {
        "sub": str(user.id),
        "name": user.username,
        "iat": now,
        "exp": now + timedelta(hours=config.settings.JWT_EXPIRY_HOURS),
    }
    return jwt.encode(claims, config.settings.JWT_SECRET, algorithm=config.settings.JWT_ALGORITHM)


def read_session(token: str) -> UUID:
    """
    Verify a session token and return the user id it was issued for.

    Raises:
        HTTPException: 401 if the token is expired, forged or malformed
    """
    try:
        claims = jwt.decode(
            token,
            config.settings.JWT_SECRET,
            algorithms=[config.settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise _unauthorized("Session expired. Please sign in again.") from e
    except jwt.InvalidTokenError as e:
        raise _unauthorized("Invalid session. Please sign in again.") from e

    try:
        return UUID(claims["sub"])
    except ValueError as e:
        raise _unauthorized("Invalid session. Please sign in again.") from e


async def get_current_user(session: Annotated[str | None, Cookie()] = None) -> User:
    """FastAPI dependency: the signed-in user, or 401."""
    if not session:
        raise _unauthorized("Not signed in.")

    user = await user_repo.get(read_session(session))
    if user is None:
        # Account deleted after the token was issued
        raise _unauthorized("Account no longer exists. Please sign in again.")
    return user
