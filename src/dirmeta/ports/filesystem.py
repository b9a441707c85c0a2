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

from abc import ABC, abstractmethod
from pathlib import Path

from ..domain.models import Classified


class FilesystemPort(ABC):
    """Abstract interface for blocking filesystem access."""

    @abstractmethod
    def list_dir(self, path: Path) -> list[Path]:
        """Return the immediate children of `path` in listing order. Raises OSError."""
        raise NotImplementedError

    @abstractmethod
    def classify(self, path: Path) -> Classified:
        """Return RawFile, RawDirectory or WalkError for `path`. Must not raise."""
        raise NotImplementedError


class AsyncFilesystemPort(ABC):
    """Same contract as FilesystemPort, for cooperative scheduling."""

    @abstractmethod
    async def list_dir(self, path: Path) -> list[Path]:
        raise NotImplementedError

    @abstractmethod
    async def classify(self, path: Path) -> Classified:
        raise NotImplementedError
