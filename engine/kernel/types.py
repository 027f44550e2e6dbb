"""
Studio Kernel: Shared Types

Data classes used across the tree builder, the editor session and the
preview composer. Plain data only: no IO, no framework imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Entry files
# ---------------------------------------------------------------------------

# Markup has no fallback list on purpose.
MARKUP_ENTRY = "index.html"
STYLESHEET_ENTRIES: tuple[str, ...] = ("styles.css", "style.css")
SCRIPT_ENTRIES: tuple[str, ...] = ("script.js", "main.js", "app.js")

# Editor language modes keyed by lowercase extension
LANGUAGE_BY_EXTENSION: dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "json": "json",
    "md": "markdown",
    "vue": "html",
    "py": "python",
    "go": "go",
    "rs": "rust",
}


def language_for(file_name: str) -> str:
    """Editor language mode for a file name. Unknown extensions are plaintext."""
    if "." not in file_name:
        return "plaintext"
    ext = file_name.rsplit(".", 1)[1].lower()
    return LANGUAGE_BY_EXTENSION.get(ext, "plaintext")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class FileRecord:
    """
    Persisted description of one file or folder within a project.

    `path` is unique within a project. A record whose `parent_path` is None
    or empty is a root entry.
    """

    id: str
    project_id: str
    name: str
    path: str
    content: str = ""
    is_folder: bool = False
    parent_path: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "name": self.name,
            "path": self.path,
            "content": self.content,
            "is_folder": self.is_folder,
            "parent_path": self.parent_path,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FileRecord:
        is_folder = d.get("is_folder", False)
        # Older payloads carry the flag as the strings "true" / "false"
        if isinstance(is_folder, str):
            is_folder = is_folder.lower() == "true"
        return cls(
            id=str(d["id"]),
            project_id=str(d.get("project_id", "")),
            name=d["name"],
            path=d["path"],
            content=d.get("content") or "",
            is_folder=bool(is_folder),
            parent_path=d.get("parent_path"),
            updated_at=str(d["updated_at"]) if d.get("updated_at") is not None else None,
        )


@dataclass(frozen=True)
class FileTreeNode:
    """
    In-memory hierarchical node derived from FileRecords.

    Immutable per build. `children` is None for files and a tuple
    (possibly empty) for folders.
    """

    id: str
    name: str
    path: str
    is_folder: bool
    content: str = ""
    children: tuple[FileTreeNode, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "is_folder": self.is_folder,
            "content": self.content,
        }
        if self.children is not None:
            d["children"] = [child.to_dict() for child in self.children]
        return d


@dataclass
class EditorTab:
    """UI-visible open-document handle with a dirty flag."""

    path: str
    name: str
    is_modified: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "name": self.name, "is_modified": self.is_modified}


@dataclass
class PreviewSources:
    """Resolved content of the three preview entry files. Missing files are ''."""

    html: str = ""
    css: str = ""
    js: str = ""
    # Paths the content came from; None when the entry file is missing
    paths: dict[str, str | None] = field(default_factory=lambda: {"html": None, "css": None, "js": None})
