# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol


class FormatDetectorPort(Protocol):
    """
    Content-format sniffing.
    Implementers return None when they do not recognise the content or hit a
    recoverable failure, so detectors can be chained.
    """

    def name(self) -> str: ...

    def detect(self, path: Path) -> Optional[str]:
        """Return a format label for the file at `path`, or None."""
        return None

    def detect_bytes(self, data: bytes) -> Optional[str]:
        """Return a format label for a leading byte prefix, or None."""
        return None
