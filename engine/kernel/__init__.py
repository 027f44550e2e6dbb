"""
Studio Kernel: the workspace core.

Four components:
  tree       - list[FileRecord] -> file-explorer tree  (pure, deterministic)
  session    - open tabs, unsaved edits, save through a FileStore
  preview    - (html, css, js) -> one renderable document  (pure)
  sandbox    - host page that isolates the composed document

Plus scheduler, which debounces preview re-renders.
"""

from engine.kernel.errors import ConflictError, NotFoundError, StudioError, TransportError, ValidationError
from engine.kernel.preview import compose_preview, preview_data_uri, select_entry_files
from engine.kernel.sandbox import render_sandbox_frame
from engine.kernel.scheduler import PreviewScheduler
from engine.kernel.session import EditorSession, FileStore, MemoryFileStore
from engine.kernel.tree import build_tree, find_node, walk
from engine.kernel.types import EditorTab, FileRecord, FileTreeNode, PreviewSources

__all__ = [
    "build_tree",
    "find_node",
    "walk",
    "EditorSession",
    "FileStore",
    "MemoryFileStore",
    "compose_preview",
    "select_entry_files",
    "preview_data_uri",
    "render_sandbox_frame",
    "PreviewScheduler",
    "FileRecord",
    "FileTreeNode",
    "EditorTab",
    "PreviewSources",
    "StudioError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "TransportError",
]
