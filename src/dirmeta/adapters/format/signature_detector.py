# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PREFIX_SIZE = 512

# (offset, magic bytes, label); first match wins, so longer magics go first
SIGNATURES: tuple[tuple[int, bytes, str], ...] = (
    (0, b"\x89PNG\r\n\x1a\n", "PNG"),
    (0, b"\xff\xd8\xff", "JPEG"),
    (0, b"GIF87a", "GIF"),
    (0, b"GIF89a", "GIF"),
    (0, b"BM", "BMP"),
    (0, b"II*\x00", "TIFF"),
    (0, b"MM\x00*", "TIFF"),
    (0, b"%PDF-", "PDF"),
    (0, b"PK\x03\x04", "ZIP"),
    (0, b"PK\x05\x06", "ZIP"),
    (0, b"\x1f\x8b", "GZIP"),
    (0, b"BZh", "BZIP2"),
    (0, b"\xfd7zXZ\x00", "XZ"),
    (0, b"7z\xbc\xaf\x27\x1c", "7Z"),
    (0, b"Rar!\x1a\x07", "RAR"),
    (0, b"\x28\xb5\x2f\xfd", "ZSTD"),
    (0, b"\x7fELF", "ELF"),
    (0, b"MZ", "PE"),
    (0, b"\xcf\xfa\xed\xfe", "MACHO"),
    (0, b"\xce\xfa\xed\xfe", "MACHO"),
    (0, b"\x00asm", "WASM"),
    (0, b"SQLite format 3\x00", "SQLITE"),
    (0, b"OggS", "OGG"),
    (0, b"fLaC", "FLAC"),
    (0, b"ID3", "MP3"),
    (0, b"\x1aE\xdf\xa3", "MATROSKA"),
    (0, b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", "CFB"),
    (257, b"ustar", "TAR"),
    (4, b"ftyp", "MP4"),
)

# RIFF containers carry their real type at offset 8
RIFF_TYPES = {b"WAVE": "WAV", b"AVI ": "AVI", b"WEBP": "WEBP"}


class SignatureDetector:
    """
    Magic-number sniffing over the first PREFIX_SIZE bytes.

    Never returns None for readable content: unknown prefixes fall back to
    TEXT (NUL-free UTF-8) or BINARY, and zero-length content is EMPTY.
    """

    def name(self) -> str:
        return "signature"

    def detect(self, path: Path) -> Optional[str]:
        try:
            with open(path, "rb") as fh:
                prefix = fh.read(PREFIX_SIZE)
        except OSError as e:
            logger.debug("SignatureDetector: read failed for %s: %s", path, e)
            return None
        return self.detect_bytes(prefix)

    def detect_bytes(self, data: bytes) -> Optional[str]:
        if not data:
            return "EMPTY"
        if data[:4] == b"RIFF" and data[8:12] in RIFF_TYPES:
            return RIFF_TYPES[data[8:12]]
        for offset, magic, label in SIGNATURES:
            if data[offset : offset + len(magic)] == magic:
                return label
        if _looks_like_text(data):
            return "TEXT"
        return "BINARY"


def _looks_like_text(data: bytes) -> bool:
    if b"\x00" in data:
        return False
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as e:
        # A multi-byte sequence cut off by the prefix limit is still text.
        return e.start >= len(data) - 3 and e.reason == "unexpected end of data"
    return True
