"""
Project commands for Studio CLI.

Each command opens an EditorSession over the HTTP file store, so the CLI
edits, saves and previews files with the same rules as the browser editor.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from engine.kernel.errors import NotFoundError
from engine.kernel.preview import preview_data_uri
from engine.kernel.sandbox import render_sandbox_frame
from engine.kernel.scheduler import PreviewScheduler
from engine.kernel.session import EditorSession
from engine.kernel.types import FileTreeNode
from studio_cli.client import ApiClient, HttpFileStore

logger = logging.getLogger(__name__)


async def open_session(client: ApiClient, project_id: str) -> EditorSession:
    """Editor session loaded with the project's current files."""
    session = EditorSession(HttpFileStore(client), project_id)
    await session.reload()
    return session


def format_tree(nodes: Iterable[FileTreeNode], depth: int = 0) -> list[str]:
    """Indented listing, folders marked with a trailing slash."""
    lines = []
    for node in nodes:
        indent = "  " * depth
        if node.is_folder:
            lines.append(f"{indent}{node.name}/")
            lines.extend(format_tree(node.children or (), depth + 1))
        else:
            lines.append(f"{indent}{node.name}")
    return lines


async def list_projects(client: ApiClient) -> list[str]:
    projects = await client.get("/api/projects")
    return [f"{p['id']}  {p['name']}  [{p['template']}]" for p in projects]


async def create_project(client: ApiClient, name: str, template: str = "static") -> dict:
    return await client.post("/api/projects", {"name": name, "template": template})


async def show_tree(client: ApiClient, project_id: str) -> str:
    session = await open_session(client, project_id)
    return "\n".join(format_tree(session.tree))


async def read_file(client: ApiClient, project_id: str, path: str) -> str:
    session = await open_session(client, project_id)
    record = next((r for r in session.records if r.path == path), None)
    if record is None or record.is_folder:
        raise NotFoundError(f"File not found: {path}")
    return session.resolve_content(path)


async def push_file(client: ApiClient, project_id: str, path: str, content: str) -> bool:
    """
    Replace a file's content, as if typed into its tab and saved.

    Returns False when the content was already up to date.
    """
    session = await open_session(client, project_id)
    session.open_file(path)
    if session.active_tab != path:
        raise NotFoundError(f"File not found: {path}")
    session.edit(path, content)
    return await session.save()


async def add_file(client: ApiClient, project_id: str, path: str, is_folder: bool = False) -> str:
    """Create a file or folder at `path`. Its parent folder must exist."""
    parent, _, name = path.strip("/").rpartition("/")
    session = await open_session(client, project_id)
    created = await session.create_file(parent or None, name, is_folder=is_folder)
    return created.path


async def remove_file(client: ApiClient, project_id: str, path: str) -> None:
    session = await open_session(client, project_id)
    await session.delete_file(path)


async def render_preview(
    client: ApiClient,
    project_id: str,
    device: str | None = None,
    data_uri: bool = False,
) -> str:
    """
    Composed preview document, or its sandbox host page when a device is given.

    With data_uri the result is a data: URL that opens the page directly in a browser.
    """
    session = await open_session(client, project_id)
    document = session.render_preview()
    if device:
        document = render_sandbox_frame(document, device=device)
    return preview_data_uri(document) if data_uri else document


async def preview_entries(client: ApiClient, project_id: str) -> list[str]:
    """Which files feed the preview, one `role  path` line per entry."""
    session = await open_session(client, project_id)
    paths = session.preview_sources().paths
    return [f"{role:<5} {paths[role] or '(none)'}" for role in ("html", "css", "js")]


async def watch_preview(
    client: ApiClient,
    project_id: str,
    out: Path,
    debounce_ms: int = 100,
    poll_seconds: float = 1.0,
    iterations: int | None = None,
) -> int:
    """
    Poll the project and rewrite `out` whenever the preview inputs change.

    Runs until cancelled, or for `iterations` polls. Returns the number of
    renders written.
    """

    def on_render(document: str) -> None:
        out.write_text(document, encoding="utf-8")
        print(f"Rendered {out}")

    scheduler = PreviewScheduler(on_render, delay=debounce_ms / 1000)
    session = await open_session(client, project_id)
    last = None
    polls = 0
    try:
        while True:
            sources = session.preview_sources()
            current = (sources.html, sources.css, sources.js)
            if current != last:
                last = current
                scheduler.request(sources)
            polls += 1
            if iterations is not None and polls >= iterations:
                break
            await asyncio.sleep(poll_seconds)
            await session.reload()
        await scheduler.flush()
    finally:
        scheduler.close()
    return scheduler.render_count
