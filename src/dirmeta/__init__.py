"""Recursive directory metadata: sizes, timestamps, formats and per-entry errors."""

from .api import DirMeta
from .domain import (
    ConfigurationError,
    DirectoryEntry,
    DirectoryReport,
    DirMetaError,
    Entry,
    ErrorKind,
    FeatureDisabledError,
    FileEntry,
    InvalidRootError,
    WalkError,
)
from .services import ChangeEvent, ChangeKind, ChangeWatcher, ReportService

__version__ = "0.6.0"

__all__ = [
    "ChangeEvent",
    "ChangeKind",
    "ChangeWatcher",
    "ConfigurationError",
    "DirMeta",
    "DirMetaError",
    "DirectoryEntry",
    "DirectoryReport",
    "Entry",
    "ErrorKind",
    "FeatureDisabledError",
    "FileEntry",
    "InvalidRootError",
    "ReportService",
    "WalkError",
]
