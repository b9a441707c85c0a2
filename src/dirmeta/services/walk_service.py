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

import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterator, Optional, Union

from ..domain.errors import InvalidRootError
from ..domain.models import (
    Classified,
    DirectoryEntry,
    ErrorKind,
    FileEntry,
    RawDirectory,
    RawFile,
    WalkError,
)
from ..domain.report import PartialResult
from ..ports.filesystem import AsyncFilesystemPort, FilesystemPort
from ..ports.format_detector import FormatDetectorPort
from . import aggregator

logger = logging.getLogger(__name__)


class _Level:
    """
    Collects the outcome of one directory's children.

    Owned by exactly one walker call; its parts only leave through `finish`,
    which hands them to the aggregator.
    """

    def __init__(
        self, directory: Path, ancestry: frozenset[Path], root_real: Path
    ) -> None:
        self.directory = directory
        self.ancestry = ancestry
        self.root_real = root_real
        self._parts: list[PartialResult] = []

    def nested(self, raw: RawDirectory, ancestry: frozenset[Path]) -> "_Level":
        return _Level(raw.path, ancestry, self.root_real)

    def is_alias(self, raw: Union[RawFile, RawDirectory]) -> bool:
        """
        True for a symlink whose target is already part of the walked tree.

        Links to an ancestor are left to `descend`, which reports them as cycles.
        """
        if not raw.is_symlink or raw.real_path in self.ancestry:
            return False
        return self.root_real in raw.real_path.parents

    def add_alias(self, raw: Union[RawFile, RawDirectory]) -> None:
        # Listed once under its own name; the target is sized where it really lives.
        logger.debug("walk: not following %s -> %s", raw.path, raw.real_path)
        if isinstance(raw, RawDirectory):
            entry = DirectoryEntry.from_raw(raw, 0)
            self._parts.append(PartialResult.of_directory(entry, PartialResult.empty()))
        else:
            entry = replace(FileEntry.from_raw(raw), size_bytes=0)
            self._parts.append(PartialResult.of_file(entry))

    def add_error(self, error: WalkError) -> None:
        logger.warning("walk: skipping %s (%s: %s)", error.path, error.kind.value, error.message)
        self._parts.append(PartialResult.of_error(error))

    def add_file(self, raw: RawFile, format_label: Optional[str]) -> None:
        self._parts.append(PartialResult.of_file(FileEntry.from_raw(raw, format_label)))

    def descend(self, raw: RawDirectory) -> Optional[frozenset[Path]]:
        """Ancestry for recursing into `raw`, or None (and an error) on a cycle."""
        if raw.real_path in self.ancestry:
            self.add_error(WalkError.cycle(raw.path, raw.real_path))
            return None
        return self.ancestry | {raw.real_path}

    def listing_failed(self, exc: OSError) -> None:
        self._parts.append(_listing_failed(self.directory, exc))

    def add_directory(self, raw: RawDirectory, nested: PartialResult) -> None:
        entry = DirectoryEntry.from_raw(raw, nested.size_bytes)
        self._parts.append(PartialResult.of_directory(entry, nested))

    def finish(self) -> PartialResult:
        return aggregator.fold(self._parts)


def _listing_failed(directory: Path, exc: OSError) -> PartialResult:
    return PartialResult.of_error(WalkError.from_os_error(directory, exc))


def _root_error(root: Path, message: str, errno: Optional[int] = None) -> WalkError:
    return WalkError(path=root, kind=ErrorKind.INVALID_ROOT, message=message, errno=errno)


def _check_root(root: Path, outcome: Classified) -> RawDirectory:
    if isinstance(outcome, WalkError):
        raise InvalidRootError(_root_error(root, outcome.message, outcome.errno))
    if not isinstance(outcome, RawDirectory):
        raise InvalidRootError(_root_error(root, "Not a directory"))
    return outcome


def _detect_format(detector: Optional[FormatDetectorPort], raw: RawFile) -> Optional[str]:
    if detector is None or not raw.regular:
        return None
    try:
        return detector.detect(raw.path)
    except Exception as e:
        # Detection is best-effort; a failing detector never fails the walk.
        logger.warning("walk: format detection failed for %s: %s", raw.path, e)
        return None


class SyncWalker:
    """
    Blocking, depth-first traversal.

    Children are handled one at a time in directory-listing order and
    subdirectories are entered as soon as they are met, so discovery order
    is deterministic for a static tree. Open directories live on an explicit
    stack, so depth is not limited by the interpreter's recursion limit.
    """

    def __init__(
        self, fs: FilesystemPort, detector: Optional[FormatDetectorPort] = None
    ) -> None:
        self._fs = fs
        self._detector = detector

    def walk(self, root: Path) -> PartialResult:
        """
        Walk everything below `root`.

        Raises:
            InvalidRootError: if `root` is missing, not a directory, or cannot be listed.
        """
        root = Path(root).absolute()
        raw_root = _check_root(root, self._fs.classify(root))
        try:
            children = self._fs.list_dir(root)
        except OSError as e:
            raise InvalidRootError(_root_error(root, e.strerror or str(e), e.errno)) from e
        logger.debug("SyncWalker: walking %s", root)
        top = _Level(root, frozenset({raw_root.real_path}), raw_root.real_path)
        return self._walk_tree(top, children)

    def _walk_tree(self, top: _Level, children: list[Path]) -> PartialResult:
        # Each frame: the directory being read (None for the root), its level,
        # and the children not yet handled.
        stack: list[tuple[Optional[RawDirectory], _Level, Iterator[Path]]] = [
            (None, top, iter(children))
        ]
        while True:
            raw, level, pending = stack[-1]
            child = next(pending, None)
            if child is None:
                stack.pop()
                finished = level.finish()
                if not stack:
                    return finished
                stack[-1][1].add_directory(raw, finished)
                continue

            outcome = self._fs.classify(child)
            if isinstance(outcome, WalkError):
                level.add_error(outcome)
            elif level.is_alias(outcome):
                level.add_alias(outcome)
            elif isinstance(outcome, RawDirectory):
                nested_ancestry = level.descend(outcome)
                if nested_ancestry is None:
                    continue
                try:
                    grandchildren = self._fs.list_dir(outcome.path)
                except OSError as e:
                    logger.warning("SyncWalker: cannot list %s: %s", outcome.path, e)
                    level.add_directory(outcome, _listing_failed(outcome.path, e))
                    continue
                stack.append(
                    (outcome, level.nested(outcome, nested_ancestry), iter(grandchildren))
                )
            else:
                level.add_file(outcome, _detect_format(self._detector, outcome))


class AsyncWalker:
    """
    Cooperative traversal over an AsyncFilesystemPort.

    Breadth-first: every directory of one depth is listed concurrently and
    all of their children are classified concurrently. Levels are folded
    deepest first once the whole tree has been read, so a level is merged
    only after all of its dispatched work has completed. The number of
    in-flight operations is left to the event loop and its thread pool.
    Cancelling the awaiting task cancels the whole walk.
    """

    def __init__(
        self, fs: AsyncFilesystemPort, detector: Optional[FormatDetectorPort] = None
    ) -> None:
        self._fs = fs
        self._detector = detector

    async def walk(self, root: Path) -> PartialResult:
        root = Path(root).absolute()
        raw_root = _check_root(root, await self._fs.classify(root))
        try:
            children = await self._fs.list_dir(root)
        except OSError as e:
            raise InvalidRootError(_root_error(root, e.strerror or str(e), e.errno)) from e
        logger.debug("AsyncWalker: walking %s", root)
        top = _Level(root, frozenset({raw_root.real_path}), raw_root.real_path)
        return await self._walk_tree(top, children)

    async def _walk_tree(self, top: _Level, children: list[Path]) -> PartialResult:
        read: list[tuple[_Level, list[tuple[RawDirectory, _Level]]]] = []
        frontier = [(top, children)]
        while frontier:
            found = await asyncio.gather(
                *(self._read_level(level, kids) for level, kids in frontier)
            )
            read.extend(zip((level for level, _ in frontier), found))
            subs = [sub for descents in found for _, sub in descents]
            listings = await asyncio.gather(*(self._list(sub) for sub in subs))
            frontier = [(sub, kids) for sub, kids in zip(subs, listings) if kids is not None]

        # children always come after their parent in `read`
        for level, descents in reversed(read):
            for raw, sub in descents:
                level.add_directory(raw, sub.finish())
        return top.finish()

    async def _list(self, level: _Level) -> Optional[list[Path]]:
        try:
            return await self._fs.list_dir(level.directory)
        except OSError as e:
            logger.warning("AsyncWalker: cannot list %s: %s", level.directory, e)
            level.listing_failed(e)
            return None

    async def _inspect(self, level: _Level, child: Path) -> tuple[Classified, Optional[str]]:
        outcome = await self._fs.classify(child)
        label = None
        if (
            isinstance(outcome, RawFile)
            and self._detector is not None
            and outcome.regular
            and not level.is_alias(outcome)
        ):
            label = await asyncio.to_thread(_detect_format, self._detector, outcome)
        return outcome, label

    async def _read_level(
        self, level: _Level, children: list[Path]
    ) -> list[tuple[RawDirectory, _Level]]:
        """Record files, errors and aliases of `level`; return the subdirectories to enter."""
        inspected = await asyncio.gather(*(self._inspect(level, child) for child in children))

        descents: list[tuple[RawDirectory, _Level]] = []
        for outcome, label in inspected:
            if isinstance(outcome, WalkError):
                level.add_error(outcome)
            elif level.is_alias(outcome):
                level.add_alias(outcome)
            elif isinstance(outcome, RawDirectory):
                nested_ancestry = level.descend(outcome)
                if nested_ancestry is not None:
                    descents.append((outcome, level.nested(outcome, nested_ancestry)))
            else:
                level.add_file(outcome, label)
        return descents
