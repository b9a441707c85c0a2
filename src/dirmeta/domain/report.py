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

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from .. import formatting
from .errors import FeatureDisabledError
from .models import DirectoryEntry, FileEntry, WalkError


@dataclass(frozen=True)
class PartialResult:
    """
    Files, directories, errors and byte total discovered below one directory.

    Produced and owned by a single walker call; only `services.aggregator`
    combines two of them.
    """

    size_bytes: int = 0
    files: tuple[FileEntry, ...] = ()
    directories: tuple[DirectoryEntry, ...] = ()
    errors: tuple[WalkError, ...] = ()

    @classmethod
    def empty(cls) -> "PartialResult":
        return cls()

    @classmethod
    def of_file(cls, entry: FileEntry) -> "PartialResult":
        return cls(size_bytes=entry.size_bytes, files=(entry,))

    @classmethod
    def of_error(cls, error: WalkError) -> "PartialResult":
        return cls(errors=(error,))

    @classmethod
    def of_directory(cls, entry: DirectoryEntry, nested: "PartialResult") -> "PartialResult":
        # The directory itself is listed after everything found beneath it.
        return cls(
            size_bytes=nested.size_bytes,
            files=nested.files,
            directories=nested.directories + (entry,),
            errors=nested.errors,
        )


@dataclass(frozen=True)
class DirectoryReport:
    """
    The outcome of one walk.

    Invariant: `total_size_bytes` equals the sum of `size_bytes` over `files`.
    The root directory itself is not part of `directories`.
    """

    root: Path
    total_size_bytes: int
    files: tuple[FileEntry, ...] = ()
    directories: tuple[DirectoryEntry, ...] = ()
    errors: tuple[WalkError, ...] = ()
    features: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.total_size_bytes < 0:
            raise ValueError("total_size_bytes must be non-negative")
        computed = sum(f.size_bytes for f in self.files)
        if computed != self.total_size_bytes:
            raise ValueError(
                f"total_size_bytes {self.total_size_bytes} != sum of files {computed}"
            )

    @property
    def name(self) -> str:
        return self.root.name or str(self.root)

    def total_size_human(self) -> str:
        if "size" not in self.features:
            raise FeatureDisabledError("size")
        return formatting.to_scaled_size(self.total_size_bytes)

    def get_file(self, file_name: str) -> list[FileEntry]:
        """Files with this name; several directories may hold the same name."""
        return [f for f in self.files if f.name == file_name]

    def get_file_by_path(self, path: Union[str, Path]) -> Optional[FileEntry]:
        target = Path(path)
        for f in self.files:
            if f.absolute_path == target:
                return f
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": str(self.root),
            "name": self.name,
            "total_size_bytes": self.total_size_bytes,
            "files": [f.to_dict() for f in self.files],
            "directories": [d.to_dict() for d in self.directories],
            "errors": [e.to_dict() for e in self.errors],
        }
