"""
Studio Kernel: Preview Scheduler

Debounces re-renders of the live preview. Composition itself is pure and
synchronous; feeding the result to the renderer waits a short fixed delay
so a burst of edits produces one render. A new request before the delay
elapses supersedes the pending one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from engine.kernel.preview import compose_sources
from engine.kernel.types import PreviewSources

logger = logging.getLogger(__name__)

# Matches the renderer host's delay between the last edit and the re-render
DEFAULT_DELAY_SECONDS = 0.1


class PreviewScheduler:
    """
    Coalesces preview render requests.

    `on_render` receives the composed document string. It runs on the
    event loop, never concurrently with itself.
    """

    def __init__(
        self,
        on_render: Callable[[str], None],
        delay: float = DEFAULT_DELAY_SECONDS,
    ) -> None:
        self._on_render = on_render
        self._delay = delay
        self._pending: asyncio.Task | None = None
        self._last: PreviewSources | None = None
        self._error: Exception | None = None
        self.render_count = 0

    @property
    def has_pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def request(self, sources: PreviewSources) -> None:
        """
        Schedule a render of `sources`, superseding any pending one.

        Raises the error of an earlier failed render, if any.
        """
        self._raise_error()
        self._last = sources
        self._cancel_pending()
        self._pending = asyncio.get_running_loop().create_task(self._render_later(sources))

    def refresh(self) -> None:
        """User-triggered refresh: re-render the last inputs after the delay."""
        if self._last is None:
            logger.debug("Preview refresh requested before any input")
            return
        self.request(self._last)

    async def flush(self) -> None:
        """
        Render the pending input now instead of waiting out the delay.

        Raises the error of an earlier failed render, if any.
        """
        task = self._pending
        if task is None or task.done():
            self._raise_error()
            return
        self._cancel_pending()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._raise_error()
        if self._last is not None:
            self._render(self._last)

    def close(self) -> None:
        """Drop any pending render. Raises the error of an earlier failed render, if any."""
        self._cancel_pending()
        self._raise_error()

    async def _render_later(self, sources: PreviewSources) -> None:
        await asyncio.sleep(self._delay)
        try:
            self._render(sources)
        except Exception as e:
            # Kept for the next request/flush/close to raise
            logger.exception("Preview render failed")
            self._error = e

    def _render(self, sources: PreviewSources) -> None:
        self.render_count += 1
        self._on_render(compose_sources(sources))

    def _raise_error(self) -> None:
        error, self._error = self._error, None
        if error is not None:
            raise error

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
