"""Broadcast channel for file change events."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

logger = structlog.get_logger()


class ChangeKind(Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True)
class FileChange:
    path: Path
    kind: ChangeKind


class ChangeChannel:
    """Fan-out of file changes to every subscriber queue.

    Publishing never blocks: queues are unbounded and consumed on the
    same event loop.
    """

    def __init__(self) -> None:
        self._subscribers: list[asyncio.Queue[FileChange]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue[FileChange]:
        queue: asyncio.Queue[FileChange] = asyncio.Queue()
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[FileChange]) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    def publish(self, change: FileChange) -> None:
        for queue in self._subscribers:
            queue.put_nowait(change)

    def publish_many(self, changes: Iterable[FileChange]) -> int:
        count = 0
        for change in changes:
            self.publish(change)
            count += 1
        if count:
            logger.debug("changes_published", count=count, subscribers=len(self._subscribers))
        return count
