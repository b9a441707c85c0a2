# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import asyncio
import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import AsyncIterator, Iterator

from watchdog.utils.dirsnapshot import DirectorySnapshot, DirectorySnapshotDiff

from ..domain.errors import InvalidRootError
from ..domain.models import ErrorKind, RawDirectory, WalkError
from ..ports.filesystem import FilesystemPort

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    CREATED = "created"
    MODIFIED = "modified"
    REMOVED = "removed"


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeKind
    path: Path
    is_dir: bool = False


def take_snapshot(root: Path) -> DirectorySnapshot:
    """
    Record every entry below `root` (and `root` itself) with its stat result.

    Entries are lstat'ed, so symlinked directories are not followed.
    Subdirectories that cannot be listed are left out.
    """
    return DirectorySnapshot(str(root), recursive=True, stat=os.lstat)


def diff_snapshots(old: DirectorySnapshot, new: DirectorySnapshot) -> list[ChangeEvent]:
    """
    Events turning `old` into `new`, ordered by path.

    Moves are reported as REMOVED plus CREATED. Directories only report
    CREATED/REMOVED; their mtime moves whenever a child changes, which is
    already reported for the child.
    """
    diff = DirectorySnapshotDiff(old, new)
    events = []

    def removed(path: str) -> None:
        events.append(ChangeEvent(ChangeKind.REMOVED, Path(path), bool(old.isdir(path))))

    def created(path: str) -> None:
        events.append(ChangeEvent(ChangeKind.CREATED, Path(path), bool(new.isdir(path))))

    for path in (*diff.files_deleted, *diff.dirs_deleted):
        removed(path)
    for path in (*diff.files_created, *diff.dirs_created):
        created(path)
    for src, dest in (*diff.files_moved, *diff.dirs_moved):
        removed(src)
        created(dest)
    for path in (*diff.files_modified, *diff.dirs_modified):
        if path not in new.paths:
            # the source side of a move; already reported above
            continue
        if old.isdir(path) != new.isdir(path):
            # same inode reused for an entry of the other type
            removed(path)
            created(path)
        elif not new.isdir(path):
            events.append(ChangeEvent(ChangeKind.MODIFIED, Path(path), False))

    events.sort(key=lambda e: (str(e.path), e.kind.value))
    return events


class ChangeWatcher:
    """
    Polls a directory tree and turns snapshot differences into ChangeEvents.

    Every call to `subscribe`/`asubscribe` is an independent subscription
    with its own baseline, taken at call time.
    """

    def __init__(
        self, root: Path, fs: FilesystemPort, *, interval: float = 1.0
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._root = Path(root).absolute()
        self._fs = fs
        self._interval = float(interval)

    @property
    def root(self) -> Path:
        return self._root

    def snapshot(self) -> DirectorySnapshot:
        return take_snapshot(self._root)

    def _baseline(self) -> DirectorySnapshot:
        outcome = self._fs.classify(self._root)
        if not isinstance(outcome, RawDirectory):
            message = outcome.message if isinstance(outcome, WalkError) else "Not a directory"
            raise InvalidRootError(
                WalkError(path=self._root, kind=ErrorKind.INVALID_ROOT, message=message)
            )
        logger.info("Watching %s for activity...", self._root)
        return self.snapshot()

    def _poll(self, previous: DirectorySnapshot) -> tuple[DirectorySnapshot, list[ChangeEvent]]:
        try:
            current = self.snapshot()
        except OSError as e:
            # root gone or unreadable; keep the last good state and retry next poll
            logger.warning("ChangeWatcher: cannot snapshot %s: %s", self._root, e)
            return previous, []
        return current, diff_snapshots(previous, current)

    def subscribe(self) -> Iterator[ChangeEvent]:
        """Blocking, never-ending stream of changes. Raises InvalidRootError up front."""
        return self._events(self._baseline())

    def _events(self, previous: DirectorySnapshot) -> Iterator[ChangeEvent]:
        while True:
            time.sleep(self._interval)
            previous, events = self._poll(previous)
            yield from events

    def asubscribe(self) -> AsyncIterator[ChangeEvent]:
        """Async variant of `subscribe`; the baseline is still taken synchronously."""
        return self._aevents(self._baseline())

    async def _aevents(self, previous: DirectorySnapshot) -> AsyncIterator[ChangeEvent]:
        while True:
            await asyncio.sleep(self._interval)
            previous, events = await asyncio.to_thread(self._poll, previous)
            for event in events:
                yield event
