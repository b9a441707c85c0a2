from .filesystem import AsyncFilesystemPort, FilesystemPort
from .format_detector import FormatDetectorPort

__all__ = ["AsyncFilesystemPort", "FilesystemPort", "FormatDetectorPort"]
