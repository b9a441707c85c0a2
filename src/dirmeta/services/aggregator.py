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

"""
Folding per-directory partial results into one report.

`merge` is the single point where results from different walker calls meet.
It is associative, and commutative up to the order of the collections, so
the concurrent walker may combine subtrees in whatever order they finish.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..config import DEFAULT_FEATURES
from ..domain.report import DirectoryReport, PartialResult


def merge(left: PartialResult, right: PartialResult) -> PartialResult:
    return PartialResult(
        size_bytes=left.size_bytes + right.size_bytes,
        files=left.files + right.files,
        directories=left.directories + right.directories,
        errors=left.errors + right.errors,
    )


def fold(parts: Iterable[PartialResult]) -> PartialResult:
    """Merge many partial results at once; equivalent to chaining `merge`."""
    size_bytes = 0
    files: list = []
    directories: list = []
    errors: list = []
    for part in parts:
        size_bytes += part.size_bytes
        files.extend(part.files)
        directories.extend(part.directories)
        errors.extend(part.errors)
    return PartialResult(
        size_bytes=size_bytes,
        files=tuple(files),
        directories=tuple(directories),
        errors=tuple(errors),
    )


def to_report(
    root: Path, partial: PartialResult, features: frozenset[str] = DEFAULT_FEATURES
) -> DirectoryReport:
    return DirectoryReport(
        root=Path(root),
        total_size_bytes=partial.size_bytes,
        files=partial.files,
        directories=partial.directories,
        errors=partial.errors,
        features=frozenset(features),
    )
