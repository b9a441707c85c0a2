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
import stat
from pathlib import Path
from typing import Optional

from ...domain.models import Classified, RawDirectory, RawFile, WalkError
from ...ports.filesystem import AsyncFilesystemPort, FilesystemPort

logger = logging.getLogger(__name__)


def _timestamps(st: os.stat_result) -> tuple[Optional[int], int, int]:
    # NOTE: st_ctime is "creation" on Windows, "inode change" on Linux.
    # Prefer a real birth time and fall back to st_ctime_ns.
    created = getattr(st, "st_birthtime_ns", None)
    if created is None:
        birth = getattr(st, "st_birthtime", None)
        created = int(birth * 1e9) if birth is not None else st.st_ctime_ns
    return created, st.st_atime_ns, st.st_mtime_ns


class LocalFS(FilesystemPort):
    """
    Local filesystem adapter and entry classifier.

    `classify` costs one lstat (plus one stat when the entry is a symlink, so
    links are followed) and one realpath per call.
    """

    def __init__(self, *, collect_times: bool = True) -> None:
        self._collect_times = bool(collect_times)

    def list_dir(self, path: Path) -> list[Path]:
        with os.scandir(path) as entries:
            return [Path(entry.path) for entry in entries]

    def classify(self, path: Path) -> Classified:
        path = Path(path)
        try:
            st = os.lstat(path)
            is_symlink = stat.S_ISLNK(st.st_mode)
            if is_symlink:
                st = os.stat(path)
            real_path = Path(os.path.realpath(path))
        except OSError as e:
            logger.debug("LocalFS.classify: stat failed for %s: %s", path, e)
            return WalkError.from_os_error(path, e)

        if self._collect_times:
            created, accessed, modified = _timestamps(st)
        else:
            created = accessed = modified = None
        read_only = not st.st_mode & stat.S_IWUSR

        if stat.S_ISDIR(st.st_mode):
            return RawDirectory(
                path=path,
                real_path=real_path,
                created_at=created,
                accessed_at=accessed,
                modified_at=modified,
                read_only=read_only,
                is_symlink=is_symlink,
            )
        return RawFile(
            path=path,
            real_path=real_path,
            size_bytes=st.st_size,
            created_at=created,
            accessed_at=accessed,
            modified_at=modified,
            read_only=read_only,
            is_symlink=is_symlink,
            regular=stat.S_ISREG(st.st_mode),
        )


class AsyncLocalFS(AsyncFilesystemPort):
    """Runs each blocking call of a FilesystemPort on the default thread pool."""

    def __init__(self, fs: Optional[FilesystemPort] = None) -> None:
        self._fs = fs or LocalFS()

    async def list_dir(self, path: Path) -> list[Path]:
        return await asyncio.to_thread(self._fs.list_dir, path)

    async def classify(self, path: Path) -> Classified:
        return await asyncio.to_thread(self._fs.classify, path)
