"""File watcher using watchfiles, publishing into a ChangeChannel.

The watcher does no debouncing of its own. Consumers (the test controller)
own their debounce timers.
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field
from pathlib import Path

import structlog
from watchfiles import Change, DefaultFilter, awatch

from cestplane.config.loader import WORKSPACE_CONFIG_DIR
from cestplane.core.paths import EXCLUDED_DIRS
from cestplane.watch.channel import ChangeChannel, ChangeKind, FileChange

logger = structlog.get_logger()

_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: ChangeKind.ADDED,
    Change.modified: ChangeKind.MODIFIED,
    Change.deleted: ChangeKind.DELETED,
}


def to_file_changes(changes: set[tuple[Change, str]]) -> list[FileChange]:
    """Convert a watchfiles batch, sorted by path for stable delivery."""
    return sorted(
        (FileChange(path=Path(raw), kind=_KIND_MAP[change]) for change, raw in changes),
        key=lambda c: (str(c.path), c.kind.value),
    )


class _WorkspaceFilter(DefaultFilter):
    """DefaultFilter plus the directories discovery never descends into.

    The settings directory stays watched so edits to its config.yaml reach
    the controller.
    """

    def __init__(self) -> None:
        ignored = sorted(EXCLUDED_DIRS - {WORKSPACE_CONFIG_DIR})
        super().__init__(ignore_dirs=(*DefaultFilter.ignore_dirs, *ignored))


@dataclass
class FileWatcher:
    """Async watcher for one workspace root."""

    workspace_root: Path
    channel: ChangeChannel
    step_ms: int = 50

    _watch_task: asyncio.Task[None] | None = field(default=None, init=False)
    _stop_event: asyncio.Event = field(default_factory=asyncio.Event, init=False)

    @property
    def running(self) -> bool:
        return self._watch_task is not None and not self._watch_task.done()

    async def start(self) -> None:
        if self._watch_task is not None:
            return
        self._stop_event.clear()
        self._watch_task = asyncio.create_task(self._watch_loop())
        logger.info("file_watcher_started", workspace_root=str(self.workspace_root))

    async def stop(self) -> None:
        self._stop_event.set()
        if self._watch_task is not None:
            self._watch_task.cancel()
            with contextlib.suppress(asyncio.CancelledError, asyncio.TimeoutError):
                await asyncio.wait_for(self._watch_task, timeout=2.0)
            self._watch_task = None
        logger.info("file_watcher_stopped")

    async def _watch_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                async for changes in awatch(
                    self.workspace_root,
                    watch_filter=_WorkspaceFilter(),
                    step=self.step_ms,
                    stop_event=self._stop_event,
                    ignore_permission_denied=True,
                ):
                    self.channel.publish_many(to_file_changes(changes))
            except asyncio.CancelledError:
                raise
            except OSError as e:
                if self._stop_event.is_set():
                    return
                logger.error("watcher_error", error=str(e))
                await asyncio.sleep(1.0)
