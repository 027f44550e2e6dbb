"""Project models. A project is a named collection of files built from a template."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

TemplateName = Literal["nextjs", "vite-vue", "static"]


class Project(BaseModel):
    """Core project model. Represents a row in the projects table."""

    id: UUID
    user_id: UUID
    name: str
    description: str | None = None
    template: str = "static"
    created_at: datetime
    updated_at: datetime


class CreateProjectRequest(BaseModel):
    """What the client sends to create a project."""

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    template: str = Field(default="static", max_length=50)


class UpdateProjectRequest(BaseModel):
    """What the client sends to update a project. All fields optional."""

    model_config = {"extra": "forbid"}

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)


class ProjectResponse(BaseModel):
    """What the API returns."""

    id: UUID
    name: str
    description: str | None
    template: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, project: Project) -> ProjectResponse:
        """Convert internal Project model to public API response."""
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            template=project.template,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )
