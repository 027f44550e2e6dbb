"""Project CRUD routes: list, create, get, update, delete."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from backend.auth import get_current_user
from backend.models.project import CreateProjectRequest, ProjectResponse, UpdateProjectRequest
from backend.models.user import User
from backend.repos.project_repo import ProjectRepo
from backend.services.templates import DEFAULT_TEMPLATE, TEMPLATES, template_files

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])
project_repo = ProjectRepo()


@router.get("", status_code=200)
async def list_projects(user: User = Depends(get_current_user)) -> list[ProjectResponse]:
    """List the current user's projects, most recently updated first."""
    projects = await project_repo.list_for_user(user.id)
    return [ProjectResponse.from_model(p) for p in projects]


@router.post("", status_code=201)
async def create_project(
    req: CreateProjectRequest,
    user: User = Depends(get_current_user),
) -> ProjectResponse:
    """Create a project and seed it with the template's starter files."""
    if req.template not in TEMPLATES:
        req = req.model_copy(update={"template": DEFAULT_TEMPLATE})
    project = await project_repo.create(user.id, req, template_files(req.template))
    logger.info("Created project %s from template %s", project.id, project.template)
    return ProjectResponse.from_model(project)


@router.get("/{project_id}", status_code=200)
async def get_project(
    project_id: UUID,
    user: User = Depends(get_current_user),
) -> ProjectResponse:
    """Get a single project by ID."""
    project = await project_repo.get(user.id, project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return ProjectResponse.from_model(project)


@router.patch("/{project_id}", status_code=200)
async def update_project(
    project_id: UUID,
    req: UpdateProjectRequest,
    user: User = Depends(get_current_user),
) -> ProjectResponse:
    """Rename a project or change its description."""
    project = await project_repo.update(user.id, project_id, req)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return ProjectResponse.from_model(project)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: UUID,
    user: User = Depends(get_current_user),
) -> Response:
    """Delete a project and every file in it."""
    deleted = await project_repo.delete(user.id, project_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
