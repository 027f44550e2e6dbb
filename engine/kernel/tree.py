"""
Studio Kernel: Tree Builder

Pure function: list[FileRecord] → list[FileTreeNode]
No IO. Deterministic: same input → same output, always.

The tree is rebuilt from the full record list on every change, never
patched in place. Siblings are ordered folders first, then by name
(code point order, ties keep input order).

A record whose parent path does not name a folder in the input is placed
at the root instead of being dropped.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from engine.kernel.types import FileRecord, FileTreeNode

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def sort_records(records: Iterable[FileRecord]) -> list[FileRecord]:
    """Folders before files, then by name. Stable, so ties keep input order."""
    return sorted(records, key=lambda r: (not r.is_folder, r.name))


def build_tree(records: Iterable[FileRecord]) -> list[FileTreeNode]:
    """
    Build the file-explorer tree from a flat record list.

    Every input record yields exactly one node. Never raises: a dangling
    parent reference, a self reference or a parent cycle degrades to
    "appears at root".
    """
    ordered = sort_records(records)

    # First folder record wins a path, so duplicate paths still produce one node each
    folder_by_path: dict[str, FileRecord] = {}
    for record in ordered:
        if record.is_folder and record.path not in folder_by_path:
            folder_by_path[record.path] = record

    roots: list[FileRecord] = []
    children: dict[str, list[FileRecord]] = {}

    for record in ordered:
        parent = _resolve_parent(record, folder_by_path)
        if parent is None:
            roots.append(record)
        else:
            children.setdefault(parent, []).append(record)

    return [_freeze(r, children, folder_by_path) for r in roots]


def find_node(tree: Iterable[FileTreeNode], path: str) -> FileTreeNode | None:
    """Depth-first lookup by path. Returns None if absent."""
    for node in walk(tree):
        if node.path == path:
            return node
    return None


def walk(tree: Iterable[FileTreeNode]) -> Iterator[FileTreeNode]:
    """Yield every node depth-first, in display order."""
    for node in tree:
        yield node
        if node.children:
            yield from walk(node.children)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _resolve_parent(record: FileRecord, folder_by_path: dict[str, FileRecord]) -> str | None:
    """Parent folder path for a record, or None if it belongs at the root."""
    parent_path = record.parent_path
    if not parent_path or parent_path == record.path:
        return None
    if parent_path not in folder_by_path:
        return None

    # Follow the ancestry: a chain that loops back to this record is a cycle
    seen: set[str] = set()
    cursor: str | None = parent_path
    while cursor and cursor not in seen:
        if cursor == record.path:
            return None
        seen.add(cursor)
        ancestor = folder_by_path.get(cursor)
        if ancestor is None:
            break
        cursor = ancestor.parent_path
    return parent_path


def _freeze(
    record: FileRecord,
    children: dict[str, list[FileRecord]],
    folder_by_path: dict[str, FileRecord],
) -> FileTreeNode:
    if not record.is_folder:
        return FileTreeNode(
            id=record.id,
            name=record.name,
            path=record.path,
            is_folder=False,
            content=record.content,
        )

    # Only the canonical folder for a path owns the children filed under it
    owned = children.get(record.path, []) if folder_by_path.get(record.path) is record else []
    return FileTreeNode(
        id=record.id,
        name=record.name,
        path=record.path,
        is_folder=True,
        content=record.content,
        children=tuple(_freeze(child, children, folder_by_path) for child in owned),
    )
