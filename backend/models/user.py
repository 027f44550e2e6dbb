"""User models for authentication and the per-user GitHub credential."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class User(BaseModel):
    """Core user model. Represents a row in the users table."""

    id: UUID
    username: str
    password_hash: str
    github_token: str | None = None
    created_at: datetime


class UserPublic(BaseModel):
    """What the API returns. No password hash, no token."""

    id: UUID
    username: str
    has_github_token: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserPublic:
        """Convert internal User model to public API response."""
        return cls(
            id=user.id,
            username=user.username,
            has_github_token=bool(user.github_token),
            created_at=user.created_at,
        )
