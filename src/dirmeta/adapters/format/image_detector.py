# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {
    ".jpg",
    ".jpeg",
    ".png",
    ".bmp",
    ".gif",
    ".tiff",
    ".tif",
    ".webp",
    ".ico",
}


class ImageDetector:
    """
    Pillow-backed identification of image files. Returns the Pillow format
    code (e.g. "PNG", "JPEG"), or None if the file is not a readable image.

    Only the header is parsed; pixel data is never decoded.
    """

    def name(self) -> str:
        return "pillow"

    def detect(self, path: Path) -> Optional[str]:
        p = Path(path)
        # extension guard keeps Pillow from probing every file in the tree
        if p.suffix.lower() not in IMAGE_SUFFIXES:
            return None
        try:
            with Image.open(p) as im:
                return im.format
        except (UnidentifiedImageError, OSError) as e:
            logger.debug("ImageDetector: %s is not a readable image: %s", p, e)
            return None
        except Exception as e:
            # some plugins raise their own errors on truncated headers
            logger.debug("ImageDetector: failed on %s: %s", p, e)
            return None

    def detect_bytes(self, data: bytes) -> Optional[str]:
        try:
            with Image.open(io.BytesIO(data)) as im:
                return im.format
        except Exception:
            return None
