from .walk_service import AsyncWalker, SyncWalker
from .watch_service import ChangeEvent, ChangeKind, ChangeWatcher
from .report_service import ReportService


__all__ = [
    'AsyncWalker',
    'SyncWalker',
    'ChangeEvent',
    'ChangeKind',
    'ChangeWatcher',
    'ReportService',
]
