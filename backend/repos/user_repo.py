"""Repository for user operations."""

from __future__ import annotations

from uuid import UUID

import asyncpg

from backend.db import system_conn, user_conn
from backend.models.user import User


def _row_to_user(row: asyncpg.Record) -> User:
    """Convert a database row to a User model."""
    return User(
        id=row["id"],
        username=row["username"],
        password_hash=row["password_hash"],
        github_token=row["github_token"],
        created_at=row["created_at"],
    )


class UserRepo:
    """All user-related database operations."""

    async def get_by_username(self, username: str) -> User | None:
        """
        Get a user by username.
        Used during login. System conn because user context not yet established.

        Args:
            username: Username to look up

        Returns:
            User if found, None otherwise
        """
        async with system_conn() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM users WHERE username = $1",
                username,
            )
            return _row_to_user(row) if row else None

    async def create(self, username: str, password_hash: str) -> User | None:
        """
        Create a new user at registration.

        Args:
            username: Unique username
            password_hash: bcrypt hash of the password

        Returns:
            Newly created User, or None if the username is taken
        """
        async with system_conn() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO users (username, password_hash)
                VALUES ($1, $2)
                ON CONFLICT (username) DO NOTHING
                RETURNING *
                """,
                username,
                password_hash,
            )
            return _row_to_user(row) if row else None

    async def get(self, user_id: UUID) -> User | None:
        """
        Get a user by ID.

        Args:
            user_id: User UUID

        Returns:
            User if found, None otherwise
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow("SELECT * FROM users WHERE id = $1", user_id)
            return _row_to_user(row) if row else None

    async def set_github_token(self, user_id: UUID, token: str) -> None:
        """Store a GitHub personal access token for a user."""
        async with user_conn(user_id) as conn:
            await conn.execute(
                "UPDATE users SET github_token = $2 WHERE id = $1",
                user_id,
                token,
            )

    async def clear_github_token(self, user_id: UUID) -> None:
        """Forget a user's GitHub token, e.g. after GitHub rejected it."""
        async with user_conn(user_id) as conn:
            await conn.execute(
                "UPDATE users SET github_token = NULL WHERE id = $1",
                user_id,
            )
