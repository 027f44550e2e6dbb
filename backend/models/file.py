"""File models. Field names match engine.kernel.types.FileRecord."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from engine.kernel.types import FileRecord


class ProjectFile(BaseModel):
    """Core file model. Represents a row in the files table."""

    id: UUID
    project_id: UUID
    name: str
    path: str
    content: str = ""
    is_folder: bool = False
    parent_path: str | None = None
    updated_at: datetime

    def to_record(self) -> FileRecord:
        """Kernel view of this row, for tree building and preview composition."""
        return FileRecord(
            id=str(self.id),
            project_id=str(self.project_id),
            name=self.name,
            path=self.path,
            content=self.content,
            is_folder=self.is_folder,
            parent_path=self.parent_path,
            updated_at=self.updated_at.isoformat(),
        )


class CreateFileRequest(BaseModel):
    """What the client sends to create a file or folder."""

    model_config = {"extra": "forbid"}

    project_id: UUID
    name: str = Field(min_length=1, max_length=255)
    path: str = Field(min_length=1, max_length=1024)
    content: str = ""
    is_folder: bool = False
    parent_path: str | None = Field(default=None, max_length=1024)


class UpdateFileRequest(BaseModel):
    """What the client sends to save a file. Both fields optional."""

    model_config = {"extra": "forbid"}

    content: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)


class FileResponse(BaseModel):
    """What the API returns."""

    id: UUID
    project_id: UUID
    name: str
    path: str
    content: str
    is_folder: bool
    parent_path: str | None
    updated_at: datetime

    @classmethod
    def from_model(cls, file: ProjectFile) -> FileResponse:
        """Convert internal ProjectFile model to public API response."""
        return cls(
            id=file.id,
            project_id=file.project_id,
            name=file.name,
            path=file.path,
            content=file.content,
            is_folder=file.is_folder,
            parent_path=file.parent_path,
            updated_at=file.updated_at,
        )


class TreeResponse(BaseModel):
    """Nested tree of a project, folders first."""

    project_id: UUID
    nodes: list[dict[str, Any]]
