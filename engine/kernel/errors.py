"""
Studio Kernel: Errors

Failures surfaced by the file-store collaborator. None of them is fatal;
they propagate to whoever drives the session and are shown to the user.
"""

from __future__ import annotations


class StudioError(Exception):
    """Base class for kernel errors."""

    pass


class ValidationError(StudioError):
    """Malformed create/update payload. The form stays editable."""

    pass


class ConflictError(StudioError):
    """A record with the same path already exists in the project."""

    pass


class NotFoundError(StudioError):
    """Operation on a stale id. The caller's cached view should be refreshed."""

    pass


class TransportError(StudioError):
    """Collaborator unreachable. Not retried automatically."""

    pass
