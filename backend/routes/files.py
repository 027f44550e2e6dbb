"""File routes: list, tree, create, save, delete."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from backend.auth import get_current_user
from backend.models.file import (
    CreateFileRequest,
    FileResponse,
    ProjectFile,
    TreeResponse,
    UpdateFileRequest,
)
from backend.models.user import User
from backend.repos.file_repo import FileRepo
from backend.repos.project_repo import ProjectRepo
from engine.kernel.tree import build_tree

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])
file_repo = FileRepo()
project_repo = ProjectRepo()


async def _project_files(user: User, project_id: UUID) -> list[ProjectFile]:
    """All files of a project the user owns. 404 if the project is not theirs."""
    project = await project_repo.get(user.id, project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return await file_repo.list_for_project(user.id, project_id)


@router.get("/api/projects/{project_id}/files", status_code=200)
async def list_files(
    project_id: UUID,
    user: User = Depends(get_current_user),
) -> list[FileResponse]:
    """Flat list of every file and folder in a project."""
    files = await _project_files(user, project_id)
    return [FileResponse.from_model(f) for f in files]


@router.get("/api/projects/{project_id}/tree", status_code=200)
async def get_tree(
    project_id: UUID,
    user: User = Depends(get_current_user),
) -> TreeResponse:
    """Nested file-explorer tree: folders first, then by name."""
    files = await _project_files(user, project_id)
    tree = build_tree(f.to_record() for f in files)
    return TreeResponse(project_id=project_id, nodes=[node.to_dict() for node in tree])


@router.post("/api/files", status_code=201)
async def create_file(
    req: CreateFileRequest,
    user: User = Depends(get_current_user),
) -> FileResponse:
    """
    Create a file or folder.

    409 if the path is taken, 400 if the parent folder does not exist.
    """
    project = await project_repo.get(user.id, req.project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")

    existing = await file_repo.get_by_path(user.id, req.project_id, req.path)
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="File already exists.")

    if req.parent_path:
        parent = await file_repo.get_by_path(user.id, req.project_id, req.parent_path)
        if not parent or not parent.is_folder:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Parent folder does not exist: {req.parent_path}",
            )

    created = await file_repo.create(user.id, req)
    if not created:
        # Lost a race with a concurrent create of the same path
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="File already exists.")

    await project_repo.touch(user.id, req.project_id)
    return FileResponse.from_model(created)


@router.patch("/api/files/{file_id}", status_code=200)
async def update_file(
    file_id: UUID,
    req: UpdateFileRequest,
    user: User = Depends(get_current_user),
) -> FileResponse:
    """Save new content and/or rename a file."""
    updated = await file_repo.update(user.id, file_id, content=req.content, name=req.name)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found.")

    await project_repo.touch(user.id, updated.project_id)
    return FileResponse.from_model(updated)


@router.delete("/api/files/{file_id}", status_code=204)
async def delete_file(
    file_id: UUID,
    user: User = Depends(get_current_user),
) -> Response:
    """Delete a file, or a folder and everything below it. Unknown ids are a no-op."""
    deleted = await file_repo.delete(user.id, file_id)
    if deleted > 1:
        logger.info("Deleted folder %s with %d descendants", file_id, deleted - 1)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
