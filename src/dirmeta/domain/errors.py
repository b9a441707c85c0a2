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

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import WalkError


class DirMetaError(Exception):
    """Base exception for domain-specific errors."""


class InvalidRootError(DirMetaError):
    """The walk root does not exist or cannot be listed."""

    def __init__(self, error: "WalkError") -> None:
        super().__init__(f"Invalid root {error.path}: {error.message}")
        self.error = error


class ConfigurationError(DirMetaError):
    """Unknown feature names or unusable configuration."""


class FeatureDisabledError(ConfigurationError):
    """An operation was called whose feature toggle is switched off."""

    def __init__(self, feature: str) -> None:
        super().__init__(f"Feature '{feature}' is not enabled")
        self.feature = feature
