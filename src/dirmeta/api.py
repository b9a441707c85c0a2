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

import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Union

from .adapters.filesystem import AsyncLocalFS, LocalFS
from .adapters.format import default_detector
from .config import require, resolve_features
from .domain.errors import InvalidRootError
from .domain.models import ErrorKind, WalkError
from .domain.report import DirectoryReport
from .ports.filesystem import AsyncFilesystemPort, FilesystemPort
from .ports.format_detector import FormatDetectorPort
from .services import aggregator
from .services.walk_service import AsyncWalker, SyncWalker
from .services.watch_service import ChangeWatcher

logger = logging.getLogger(__name__)


class DirMeta:
    """
    A walk bound to one root directory.

    Example:
        report = DirMeta("/path/to/dir").walk_sync()
        report = await DirMeta("/path/to/dir").walk_async()

    Composition root: wires LocalFS (or the given ports) and the default
    detector chain according to the enabled features.
    """

    def __init__(
        self,
        root: Union[str, Path],
        *,
        features: Optional[Union[str, Iterable[str]]] = None,
        fs: Optional[FilesystemPort] = None,
        async_fs: Optional[AsyncFilesystemPort] = None,
        detector: Optional[FormatDetectorPort] = None,
        strict: bool = True,
    ) -> None:
        self._root = Path(root).absolute()
        self._features = resolve_features(features)
        self._fs = fs or LocalFS(collect_times="time" in self._features)
        self._async_fs = async_fs or AsyncLocalFS(self._fs)

        if "file-type" in self._features:
            self._detector: Optional[FormatDetectorPort] = detector or default_detector()
        else:
            self._detector = None

        if strict and not os.path.lexists(self._root):
            raise InvalidRootError(
                WalkError(
                    path=self._root,
                    kind=ErrorKind.INVALID_ROOT,
                    message="No such file or directory",
                )
            )
        logger.debug("DirMeta(%s) features=%s", self._root, sorted(self._features))

    @classmethod
    def new(cls, root: Union[str, Path], **kwargs) -> "DirMeta":
        return cls(root, **kwargs)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def features(self) -> frozenset[str]:
        return self._features

    def walk_sync(self) -> DirectoryReport:
        """
        Read every directory and file below the root, blocking until done.

        Raises:
            InvalidRootError: if the root itself cannot be read.
            FeatureDisabledError: if the `sync` feature is off.
        """
        require(self._features, "sync")
        partial = SyncWalker(self._fs, self._detector).walk(self._root)
        return self._report(partial)

    async def walk_async(self) -> DirectoryReport:
        """Same contract as `walk_sync`, running on the event loop."""
        require(self._features, "async")
        partial = await AsyncWalker(self._async_fs, self._detector).walk(self._root)
        return self._report(partial)

    def watch(self, interval: float = 1.0) -> ChangeWatcher:
        require(self._features, "watcher")
        return ChangeWatcher(self._root, self._fs, interval=interval)

    def _report(self, partial) -> DirectoryReport:
        report = aggregator.to_report(self._root, partial, self._features)
        logger.info(
            "Walked %s: %d files, %d directories, %d errors, %d bytes",
            self._root,
            len(report.files),
            len(report.directories),
            len(report.errors),
            report.total_size_bytes,
        )
        return report
