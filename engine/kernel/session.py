"""
Studio Kernel: Editor Session

Owns the open tabs, the active-tab pointer and the unsaved edits of one
project, and coordinates them with the file-store collaborator.

Invariants:
- at most one tab per path
- a tab is modified if and only if an unsaved edit exists for its path
- the active tab, when set, is always one of the open tabs

This is where IO happens (through FileStore). The tree builder and the
preview composer are pure.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Iterable

from engine.kernel.errors import ConflictError, NotFoundError, StudioError, ValidationError
from engine.kernel.preview import compose_sources, select_entry_files
from engine.kernel.tree import build_tree
from engine.kernel.types import EditorTab, FileRecord, FileTreeNode, PreviewSources, language_for

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class FileStore:
    """
    Abstract file-store interface.
    Implement over HTTP or Postgres for production, or in-memory for tests.
    """

    async def list_files(self, project_id: str) -> list[FileRecord]:
        """All records of a project, in any order."""
        raise NotImplementedError

    async def create_file(self, record: FileRecord) -> FileRecord:
        """Persist a new record. Raises ConflictError if the path is taken."""
        raise NotImplementedError

    async def update_file(self, file_id: str, content: str | None = None, name: str | None = None) -> FileRecord:
        """Update content and/or name. Raises NotFoundError for an unknown id."""
        raise NotImplementedError

    async def delete_file(self, file_id: str) -> None:
        """Delete a record. Deleting a folder deletes everything under it."""
        raise NotImplementedError


class MemoryFileStore(FileStore):
    """In-memory file store for testing."""

    def __init__(self, records: Iterable[FileRecord] = ()) -> None:
        self.records: dict[str, FileRecord] = {}
        self.update_calls: list[tuple[str, str | None]] = []
        for record in records:
            self.records[record.id] = dataclasses.replace(record)

    async def list_files(self, project_id: str) -> list[FileRecord]:
        return [dataclasses.replace(r) for r in self.records.values() if r.project_id == project_id]

    async def create_file(self, record: FileRecord) -> FileRecord:
        if not record.name or not record.path:
            raise ValidationError("File name and path are required")
        for existing in self.records.values():
            if existing.project_id == record.project_id and existing.path == record.path:
                raise ConflictError(f"File already exists: {record.path}")
        created = dataclasses.replace(record, id=record.id or uuid.uuid4().hex)
        self.records[created.id] = created
        return dataclasses.replace(created)

    async def update_file(self, file_id: str, content: str | None = None, name: str | None = None) -> FileRecord:
        self.update_calls.append((file_id, content))
        record = self.records.get(file_id)
        if record is None:
            raise NotFoundError(f"File not found: {file_id}")
        if content is not None:
            record.content = content
        if name is not None:
            record.name = name
        return dataclasses.replace(record)

    async def delete_file(self, file_id: str) -> None:
        record = self.records.pop(file_id, None)
        if record is None or not record.is_folder:
            return
        prefix = record.path + "/"
        for other_id, other in list(self.records.items()):
            if other.project_id == record.project_id and other.path.startswith(prefix):
                del self.records[other_id]


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class EditorSession:
    """
    Multi-document editing session for one project.

    Tabs are keyed by path. Unsaved edits override persisted content
    everywhere through resolve_content().
    """

    def __init__(self, store: FileStore, project_id: str, records: Iterable[FileRecord] = ()):
        self._store = store
        self.project_id = project_id
        self._records: dict[str, FileRecord] = {}
        self.tree: list[FileTreeNode] = []
        self._tabs: list[EditorTab] = []
        self._active: str | None = None
        self._unsaved: dict[str, str] = {}
        self._saving: dict[str, int] = {}
        self.load(records)

    # -- read-only views --

    @property
    def tabs(self) -> list[EditorTab]:
        """Open tabs in insertion order (copies)."""
        return [dataclasses.replace(t) for t in self._tabs]

    @property
    def active_tab(self) -> str | None:
        return self._active

    @property
    def unsaved_edits(self) -> dict[str, str]:
        return dict(self._unsaved)

    @property
    def records(self) -> list[FileRecord]:
        return list(self._records.values())

    def get_tab(self, path: str) -> EditorTab | None:
        tab = self._find_tab(path)
        return dataclasses.replace(tab) if tab else None

    # -- records --

    def load(self, records: Iterable[FileRecord]) -> None:
        """
        Replace the persisted snapshot and rebuild the tree.

        Tabs whose file disappeared (or turned into a folder) are closed.
        """
        self._records = {}
        for record in records:
            self._records.setdefault(record.path, record)
        self.tree = build_tree(self._records.values())

        for tab in list(self._tabs):
            record = self._records.get(tab.path)
            if record is None or record.is_folder:
                self.close_tab(tab.path)

    async def reload(self) -> None:
        """Fetch the record list from the store and rebuild."""
        self.load(await self._store.list_files(self.project_id))

    # -- tabs --

    def open_file(self, path: str) -> None:
        """Open a tab for `path` if needed and make it active. Folders are never tabs."""
        record = self._records.get(path)
        if record is None or record.is_folder:
            logger.debug("Ignoring open of %r: not a file", path)
            return

        if self._find_tab(path) is None:
            self._tabs.append(EditorTab(path=path, name=record.name, is_modified=path in self._unsaved))
        self._active = path

    def select_tab(self, path: str) -> None:
        """Activate an already open tab."""
        if self._find_tab(path) is not None:
            self._active = path

    def close_tab(self, path: str) -> None:
        """
        Close the tab for `path`. Unsaved edits for it are discarded, not saved.

        If it was active, the last remaining tab becomes active.
        """
        tab = self._find_tab(path)
        if tab is None:
            return
        self._tabs.remove(tab)
        if self._unsaved.pop(path, None) is not None:
            logger.debug("Discarded unsaved edit for %r on close", path)
        if self._active == path:
            self._active = self._tabs[-1].path if self._tabs else None

    # -- edits --

    def edit(self, path: str, content: str) -> None:
        """
        Record new content for the active tab. Latest write wins.

        Editing back to the persisted content clears the pending edit, unless
        a save of the path is in flight.
        """
        if self._active is None or path != self._active:
            logger.debug("Ignoring edit of %r: not the active tab", path)
            return

        tab = self._find_tab(path)
        record = self._records.get(path)
        persisted = record.content if record else ""
        # While a save is in flight the persisted content is about to change
        if content == persisted and not self.is_saving(path):
            self._unsaved.pop(path, None)
            if tab:
                tab.is_modified = False
        else:
            self._unsaved[path] = content
            if tab:
                tab.is_modified = True

    def resolve_content(self, path: str) -> str:
        """Current content of `path`: the unsaved edit if any, else persisted content."""
        if path in self._unsaved:
            return self._unsaved[path]
        record = self._records.get(path)
        return record.content if record else ""

    def language_for(self, path: str) -> str:
        record = self._records.get(path)
        return language_for(record.name if record else path.rsplit("/", 1)[-1])

    # -- save --

    def is_saving(self, path: str) -> bool:
        return self._saving.get(path, 0) > 0

    def can_save(self) -> bool:
        """Whether the save control should be enabled."""
        active = self._active
        return active is not None and active in self._unsaved and not self.is_saving(active)

    async def save(self, path: str | None = None) -> bool:
        """
        Persist the pending edit for `path` (default: active tab).

        Returns False when there is nothing to save. On store failure the
        edit and the modified flag are left as they were and the error
        propagates. Concurrent saves of one path are not serialized.
        """
        path = path or self._active
        if path is None or path not in self._unsaved:
            return False

        record = self._records.get(path)
        if record is None:
            raise NotFoundError(f"No persisted file for {path!r}; refresh the project")

        content = self._unsaved[path]
        self._saving[path] = self._saving.get(path, 0) + 1
        try:
            updated = await self._store.update_file(record.id, content=content)
        except StudioError as e:
            logger.warning("Save of %r failed: %s", path, e)
            raise
        finally:
            self._saving[path] -= 1
            if not self._saving[path]:
                del self._saving[path]

        current = self._records.get(path)
        if current is None or current.id != record.id:
            # Reloaded or deleted while saving; the fresher snapshot stands
            logger.debug("Skipping write-back of %r: record replaced during save", path)
            return True

        self._records[path] = dataclasses.replace(current, content=updated.content, updated_at=updated.updated_at)
        self.tree = build_tree(self._records.values())

        # Only an edit that matches what was persisted is settled
        pending = self._unsaved.get(path)
        if pending is not None and pending == updated.content:
            del self._unsaved[path]
        tab = self._find_tab(path)
        if tab:
            tab.is_modified = path in self._unsaved
        return True

    async def handle_shortcut(self, key: str, ctrl: bool = False, meta: bool = False) -> bool:
        """
        Keyboard trigger. Ctrl/Cmd+S saves the active tab.

        Returns True when the key was consumed and the default action
        should be suppressed.
        """
        if not (ctrl or meta) or key.lower() != "s":
            return False
        if self._active is not None:
            await self.save(self._active)
        return True

    # -- file operations --

    async def create_file(self, parent_path: str | None, name: str, is_folder: bool = False) -> FileRecord:
        """Create a file or folder under `parent_path` ('' or None for the root)."""
        name = name.strip()
        if not name or "/" in name:
            raise ValidationError(f"Invalid file name: {name!r}")

        parent_path = parent_path or None
        if parent_path is not None:
            parent = self._records.get(parent_path)
            if parent is None or not parent.is_folder:
                raise ValidationError(f"Parent folder not found: {parent_path!r}")

        path = f"{parent_path}/{name}" if parent_path else name
        created = await self._store.create_file(
            FileRecord(
                id="",
                project_id=self.project_id,
                name=name,
                path=path,
                content="",
                is_folder=is_folder,
                parent_path=parent_path,
            )
        )
        await self.reload()
        return created

    async def delete_file(self, path: str) -> None:
        """Delete `path` through the store and close every tab under it."""
        record = self._records.get(path)
        if record is None:
            raise NotFoundError(f"File not found: {path!r}")

        await self._store.delete_file(record.id)

        prefix = path + "/"
        for tab in list(self._tabs):
            if tab.path == path or (record.is_folder and tab.path.startswith(prefix)):
                self.close_tab(tab.path)
        await self.reload()

    # -- preview --

    def preview_sources(self) -> PreviewSources:
        return select_entry_files(self._records.values(), self.resolve_content)

    def render_preview(self) -> str:
        """Compose the live preview from current (possibly unsaved) content."""
        return compose_sources(self.preview_sources())

    # -- internals --

    def _find_tab(self, path: str) -> EditorTab | None:
        for tab in self._tabs:
            if tab.path == path:
                return tab
        return None
