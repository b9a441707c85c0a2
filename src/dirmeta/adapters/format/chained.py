# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from ...ports.format_detector import FormatDetectorPort

logger = logging.getLogger(__name__)


class ChainedDetector:
    """Asks each detector in turn; the first non-None label wins."""

    def __init__(self, detectors: Iterable[FormatDetectorPort]) -> None:
        self._detectors = tuple(detectors)

    def name(self) -> str:
        return "+".join(d.name() for d in self._detectors)

    def detect(self, path: Path) -> Optional[str]:
        for detector in self._detectors:
            label = detector.detect(path)
            if label:
                return label
        return None

    def detect_bytes(self, data: bytes) -> Optional[str]:
        for detector in self._detectors:
            label = detector.detect_bytes(data)
            if label:
                return label
        return None
