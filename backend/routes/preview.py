"""Preview routes: the composed document and its sandboxed host page."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from backend.auth import get_current_user
from backend.models.user import User
from backend.repos.file_repo import FileRepo
from backend.repos.project_repo import ProjectRepo
from engine.kernel.errors import ValidationError
from engine.kernel.preview import compose_sources, select_entry_files
from engine.kernel.sandbox import render_sandbox_frame

router = APIRouter(prefix="/api/projects", tags=["preview"])
file_repo = FileRepo()
project_repo = ProjectRepo()

# No caching: the document changes on every save
_NO_STORE = {"Cache-Control": "no-store"}


async def _compose(user: User, project_id: UUID) -> tuple[str, str]:
    """Composed preview document and project name, from persisted content only."""
    project = await project_repo.get(user.id, project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")

    files = await file_repo.list_for_project(user.id, project_id)
    records = [f.to_record() for f in files]
    content_by_path = {r.path: r.content for r in records}
    sources = select_entry_files(records, lambda path: content_by_path.get(path, ""))
    return compose_sources(sources), project.name


@router.get("/{project_id}/preview", status_code=200)
async def preview_project(
    project_id: UUID,
    download: bool = False,
    user: User = Depends(get_current_user),
) -> HTMLResponse:
    """
    Render the project's entry files as one HTML document.

    With download=true the browser saves it instead of displaying it.
    """
    document, name = await _compose(user, project_id)
    headers = dict(_NO_STORE)
    if download:
        filename = "".join(c if c.isalnum() or c in "-_" else "-" for c in name).strip("-") or "preview"
        headers["Content-Disposition"] = f'attachment; filename="{filename}.html"'
    return HTMLResponse(content=document, headers=headers)


@router.get("/{project_id}/preview/frame", status_code=200)
async def preview_frame(
    project_id: UUID,
    device: str = "desktop",
    user: User = Depends(get_current_user),
) -> HTMLResponse:
    """Host page that embeds the preview in a sandboxed iframe at a device width."""
    document, name = await _compose(user, project_id)
    try:
        page = render_sandbox_frame(document, device=device, title=f"{name} - Live Preview")
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return HTMLResponse(content=page, headers=_NO_STORE)
