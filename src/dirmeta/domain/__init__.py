from .errors import (
    ConfigurationError,
    DirMetaError,
    FeatureDisabledError,
    InvalidRootError,
)
from .models import (
    Classified,
    DirectoryEntry,
    Entry,
    ErrorKind,
    FileEntry,
    RawDirectory,
    RawFile,
    WalkError,
)
from .report import DirectoryReport, PartialResult

__all__ = [
    "Classified",
    "ConfigurationError",
    "DirMetaError",
    "DirectoryEntry",
    "DirectoryReport",
    "Entry",
    "ErrorKind",
    "FeatureDisabledError",
    "FileEntry",
    "InvalidRootError",
    "PartialResult",
    "RawDirectory",
    "RawFile",
    "WalkError",
]
