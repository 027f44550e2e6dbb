"""Repository for file operations. Access is scoped through project ownership by RLS."""

from __future__ import annotations

from uuid import UUID

import asyncpg

from backend.db import user_conn
from backend.models.file import CreateFileRequest, ProjectFile


def _row_to_file(row: asyncpg.Record) -> ProjectFile:
    """Convert a database row to a ProjectFile model."""
    return ProjectFile(
        id=row["id"],
        project_id=row["project_id"],
        name=row["name"],
        path=row["path"],
        content=row["content"] or "",
        is_folder=row["is_folder"],
        parent_path=row["parent_path"],
        updated_at=row["updated_at"],
    )


def _like_prefix(path: str) -> str:
    """LIKE pattern matching every path strictly below `path`."""
    escaped = path.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"{escaped}/%"


class FileRepo:
    """All file-related database operations."""

    async def list_for_project(self, user_id: UUID, project_id: UUID) -> list[ProjectFile]:
        """Every file and folder of a project, ordered by path."""
        async with user_conn(user_id) as conn:
            rows = await conn.fetch(
                "SELECT * FROM files WHERE project_id = $1 ORDER BY path",
                project_id,
            )
            return [_row_to_file(row) for row in rows]

    async def get(self, user_id: UUID, file_id: UUID) -> ProjectFile | None:
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow("SELECT * FROM files WHERE id = $1", file_id)
            return _row_to_file(row) if row else None

    async def get_by_path(self, user_id: UUID, project_id: UUID, path: str) -> ProjectFile | None:
        """
        Look up a file by its project-unique path.

        Args:
            user_id: User UUID
            project_id: Project UUID
            path: Full path within the project

        Returns:
            ProjectFile if present, None otherwise
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                "SELECT * FROM files WHERE project_id = $1 AND path = $2",
                project_id,
                path,
            )
            return _row_to_file(row) if row else None

    async def create(self, user_id: UUID, req: CreateFileRequest) -> ProjectFile | None:
        """
        Insert a file or folder.

        Returns:
            Newly created ProjectFile, or None if the path is already taken
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO files (project_id, name, path, content, is_folder, parent_path)
                VALUES ($1, $2, $3, $4, $5, $6)
                ON CONFLICT (project_id, path) DO NOTHING
                RETURNING *
                """,
                req.project_id,
                req.name,
                req.path,
                req.content,
                req.is_folder,
                req.parent_path or None,
            )
            return _row_to_file(row) if row else None

    async def update(
        self,
        user_id: UUID,
        file_id: UUID,
        content: str | None = None,
        name: str | None = None,
    ) -> ProjectFile | None:
        """
        Update content and/or name. Path is left unchanged.

        Returns:
            Updated ProjectFile if found, None otherwise
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                """
                UPDATE files
                SET content = COALESCE($2, content),
                    name = COALESCE($3, name),
                    updated_at = now()
                WHERE id = $1
                RETURNING *
                """,
                file_id,
                content,
                name,
            )
            return _row_to_file(row) if row else None

    async def delete(self, user_id: UUID, file_id: UUID) -> int:
        """
        Delete a file, or a folder together with everything below it.

        Returns:
            Number of rows deleted (0 if the id is unknown)
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                "SELECT project_id, path, is_folder FROM files WHERE id = $1",
                file_id,
            )
            if not row:
                return 0
            if not row["is_folder"]:
                await conn.execute("DELETE FROM files WHERE id = $1", file_id)
                return 1
            result = await conn.execute(
                """
                DELETE FROM files
                WHERE project_id = $1 AND (id = $2 OR path LIKE $3 ESCAPE '\\')
                """,
                row["project_id"],
                file_id,
                _like_prefix(row["path"]),
            )
            return int(result.split()[-1])
