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

import errno as _errno
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from .. import formatting


class ErrorKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    CYCLE_DETECTED = "cycle_detected"
    UNREADABLE_METADATA = "unreadable_metadata"
    INVALID_ROOT = "invalid_root"


@dataclass(frozen=True)
class WalkError:
    """A failed attempt to list or stat one path. Collected, never raised."""

    path: Path
    kind: ErrorKind
    message: str
    errno: Optional[int] = None

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> "WalkError":
        if isinstance(exc, PermissionError):
            kind = ErrorKind.PERMISSION_DENIED
        elif isinstance(exc, FileNotFoundError):
            kind = ErrorKind.NOT_FOUND
        elif exc.errno == _errno.ELOOP:
            kind = ErrorKind.CYCLE_DETECTED
        else:
            kind = ErrorKind.UNREADABLE_METADATA
        message = exc.strerror or str(exc) or type(exc).__name__
        return cls(path=Path(path), kind=kind, message=message, errno=exc.errno)

    @classmethod
    def cycle(cls, path: Path, real_path: Path) -> "WalkError":
        return cls(
            path=Path(path),
            kind=ErrorKind.CYCLE_DETECTED,
            message=f"`{path}` resolves to ancestor `{real_path}`",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "kind": self.kind.value,
            "message": self.message,
            "errno": self.errno,
        }


@dataclass(frozen=True)
class RawFile:
    path: Path
    real_path: Path
    size_bytes: int
    created_at: Optional[int]
    accessed_at: Optional[int]
    modified_at: Optional[int]
    read_only: bool = False
    is_symlink: bool = False
    # False for fifos, sockets and devices; their contents are never read
    regular: bool = True


@dataclass(frozen=True)
class RawDirectory:
    path: Path
    real_path: Path
    created_at: Optional[int]
    accessed_at: Optional[int]
    modified_at: Optional[int]
    read_only: bool = False
    is_symlink: bool = False


Classified = Union[RawFile, RawDirectory, WalkError]


@dataclass(frozen=True)
class Entry:
    """
    Shared attributes of anything found during a walk.

    Timestamps are nanoseconds since the Unix epoch (UTC), or None where the
    platform does not report them. Local-time rendering happens only in the
    accessors below.
    """

    name: str
    absolute_path: Path
    size_bytes: int = 0
    created_at: Optional[int] = None
    accessed_at: Optional[int] = None
    modified_at: Optional[int] = None
    read_only: bool = False
    is_symlink: bool = False

    kind = "entry"

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("entry name must not be empty")
        if self.size_bytes < 0:
            raise ValueError(f"negative size for {self.absolute_path}")

    @property
    def path(self) -> Path:
        return self.absolute_path

    def formatted_size(self) -> str:
        return formatting.to_scaled_size(self.size_bytes)

    def created_24h(self) -> Optional[str]:
        return _maybe(formatting.to_local_24h, self.created_at)

    def created_12h(self) -> Optional[str]:
        return _maybe(formatting.to_local_12h, self.created_at)

    def created_relative(self, now: Optional[int] = None) -> Optional[str]:
        if self.created_at is None:
            return None
        return formatting.to_relative_duration(self.created_at, now)

    def accessed_24h(self) -> Optional[str]:
        return _maybe(formatting.to_local_24h, self.accessed_at)

    def accessed_12h(self) -> Optional[str]:
        return _maybe(formatting.to_local_12h, self.accessed_at)

    def accessed_relative(self, now: Optional[int] = None) -> Optional[str]:
        if self.accessed_at is None:
            return None
        return formatting.to_relative_duration(self.accessed_at, now)

    def modified_24h(self) -> Optional[str]:
        return _maybe(formatting.to_local_24h, self.modified_at)

    def modified_12h(self) -> Optional[str]:
        return _maybe(formatting.to_local_12h, self.modified_at)

    def modified_relative(self, now: Optional[int] = None) -> Optional[str]:
        if self.modified_at is None:
            return None
        return formatting.to_relative_duration(self.modified_at, now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "name": self.name,
            "path": str(self.absolute_path),
            "size_bytes": self.size_bytes,
            "created_ns": self.created_at,
            "accessed_ns": self.accessed_at,
            "modified_ns": self.modified_at,
            "read_only": self.read_only,
            "symlink": self.is_symlink,
            "format_label": getattr(self, "format_label", None),
        }


@dataclass(frozen=True)
class FileEntry(Entry):
    format_label: Optional[str] = None

    kind = "file"

    @classmethod
    def from_raw(cls, raw: RawFile, format_label: Optional[str] = None) -> "FileEntry":
        return cls(
            name=raw.path.name,
            absolute_path=raw.path,
            size_bytes=raw.size_bytes,
            created_at=raw.created_at,
            accessed_at=raw.accessed_at,
            modified_at=raw.modified_at,
            read_only=raw.read_only,
            is_symlink=raw.is_symlink,
            format_label=format_label,
        )


@dataclass(frozen=True)
class DirectoryEntry(Entry):
    """A directory; `size_bytes` is the transitive sum of its descendant files."""

    kind = "directory"

    @property
    def format_label(self) -> None:
        return None

    @classmethod
    def from_raw(cls, raw: RawDirectory, subtree_size: int) -> "DirectoryEntry":
        return cls(
            name=raw.path.name,
            absolute_path=raw.path,
            size_bytes=subtree_size,
            created_at=raw.created_at,
            accessed_at=raw.accessed_at,
            modified_at=raw.modified_at,
            read_only=raw.read_only,
            is_symlink=raw.is_symlink,
        )


def _maybe(fn, value):
    return None if value is None else fn(value)
