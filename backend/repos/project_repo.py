"""Repository for project operations."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

import asyncpg

from backend.db import user_conn
from backend.models.project import CreateProjectRequest, Project, UpdateProjectRequest
from backend.services.templates import TemplateFile


def _row_to_project(row: asyncpg.Record) -> Project:
    """Convert a database row to a Project model."""
    return Project(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        description=row["description"],
        template=row["template"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class ProjectRepo:
    """All project-related database operations."""

    async def create(
        self,
        user_id: UUID,
        req: CreateProjectRequest,
        template_files: list[TemplateFile],
    ) -> Project:
        """
        Create a project together with its template files.

        Both inserts share one transaction, so a project never exists
        without its starting files.

        Args:
            user_id: User UUID
            req: CreateProjectRequest with project details
            template_files: Initial files and folders, parents before children

        Returns:
            Newly created Project
        """
        project_id = uuid4()
        now = datetime.now(UTC)

        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO projects (id, user_id, name, description, template, created_at, updated_at)
                VALUES ($1, $2, $3, $4, $5, $6, $6)
                RETURNING *
                """,
                project_id,
                user_id,
                req.name,
                req.description,
                req.template,
                now,
            )
            await conn.executemany(
                """
                INSERT INTO files (project_id, name, path, content, is_folder, parent_path)
                VALUES ($1, $2, $3, $4, $5, $6)
                """,
                [(project_id, f.name, f.path, f.content, f.is_folder, f.parent_path) for f in template_files],
            )
            return _row_to_project(row)

    async def get(self, user_id: UUID, project_id: UUID) -> Project | None:
        """
        Get a project by ID. RLS ensures only the owner can access.

        Args:
            user_id: User UUID
            project_id: Project UUID

        Returns:
            Project if found and owned by user, None otherwise
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow("SELECT * FROM projects WHERE id = $1", project_id)
            return _row_to_project(row) if row else None

    async def list_for_user(self, user_id: UUID) -> list[Project]:
        """List a user's projects, most recently updated first."""
        async with user_conn(user_id) as conn:
            rows = await conn.fetch("SELECT * FROM projects ORDER BY updated_at DESC")
            return [_row_to_project(row) for row in rows]

    async def update(self, user_id: UUID, project_id: UUID, req: UpdateProjectRequest) -> Project | None:
        """
        Update a project's name and/or description.

        Args:
            user_id: User UUID
            project_id: Project UUID
            req: UpdateProjectRequest with fields to update

        Returns:
            Updated Project if found and owned by user, None otherwise
        """
        updates = {}
        if req.name is not None:
            updates["name"] = req.name
        if req.description is not None:
            updates["description"] = req.description

        if not updates:
            return await self.get(user_id, project_id)

        set_clause = ", ".join(f"{k} = ${i + 2}" for i, k in enumerate(updates))
        values = list(updates.values())

        async with user_conn(user_id) as conn:
            # S608/B608: False positive - set_clause only contains validated column names
            row = await conn.fetchrow(
                f"""
                UPDATE projects
                SET {set_clause}, updated_at = now()
                WHERE id = $1
                RETURNING *
                """,  # nosec B608
                project_id,
                *values,
            )
            return _row_to_project(row) if row else None

    async def touch(self, user_id: UUID, project_id: UUID) -> None:
        """Bump updated_at after a file change."""
        async with user_conn(user_id) as conn:
            await conn.execute("UPDATE projects SET updated_at = now() WHERE id = $1", project_id)

    async def delete(self, user_id: UUID, project_id: UUID) -> bool:
        """
        Delete a project. Its files go with it (ON DELETE CASCADE).

        Returns:
            True if deleted, False if not found or not owned by user
        """
        async with user_conn(user_id) as conn:
            result = await conn.execute("DELETE FROM projects WHERE id = $1", project_id)
            return result == "DELETE 1"
