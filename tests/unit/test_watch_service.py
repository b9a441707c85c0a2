# tests/unit/test_watch_service.py
import asyncio
from pathlib import Path

import pytest

from dirmeta import DirMeta
from dirmeta.adapters.filesystem import LocalFS
from dirmeta.config import DEFAULT_FEATURES
from dirmeta.domain import InvalidRootError
from dirmeta.services.watch_service import (
    ChangeEvent,
    ChangeKind,
    ChangeWatcher,
    diff_snapshots,
    take_snapshot,
)


def test_snapshot_covers_nested_entries(tmp_path: Path):
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "d").mkdir()
    (tmp_path / "d" / "b.txt").write_text("bb")
    snap = take_snapshot(tmp_path)
    assert {Path(p) for p in snap.paths} == {
        tmp_path,
        tmp_path / "a.txt",
        tmp_path / "d",
        tmp_path / "d" / "b.txt",
    }


def test_diff_reports_created_modified_removed(tmp_path: Path):
    (tmp_path / "keep.txt").write_text("1")
    (tmp_path / "edit.txt").write_text("1")
    (tmp_path / "drop.txt").write_text("1")
    before = take_snapshot(tmp_path)

    (tmp_path / "edit.txt").write_text("longer content")
    (tmp_path / "drop.txt").unlink()
    (tmp_path / "new").mkdir()
    after = take_snapshot(tmp_path)

    assert diff_snapshots(before, after) == [
        ChangeEvent(ChangeKind.REMOVED, tmp_path / "drop.txt"),
        ChangeEvent(ChangeKind.MODIFIED, tmp_path / "edit.txt"),
        ChangeEvent(ChangeKind.CREATED, tmp_path / "new", is_dir=True),
    ]
    assert diff_snapshots(after, after) == []


def test_rename_is_removed_then_created(tmp_path: Path):
    (tmp_path / "old.txt").write_text("same")
    before = take_snapshot(tmp_path)
    (tmp_path / "old.txt").rename(tmp_path / "renamed.txt")

    assert diff_snapshots(before, take_snapshot(tmp_path)) == [
        ChangeEvent(ChangeKind.REMOVED, tmp_path / "old.txt"),
        ChangeEvent(ChangeKind.CREATED, tmp_path / "renamed.txt"),
    ]


def test_file_replaced_by_directory(tmp_path: Path):
    p = tmp_path / "thing"
    p.write_text("x")
    before = take_snapshot(tmp_path)
    p.unlink()
    p.mkdir()
    kinds = [(e.kind, e.is_dir) for e in diff_snapshots(before, take_snapshot(tmp_path))]
    assert kinds == [(ChangeKind.CREATED, True), (ChangeKind.REMOVED, False)]


def test_subscribe_yields_changes_lazily(tmp_path: Path):
    watcher = ChangeWatcher(tmp_path, LocalFS(), interval=0.01)
    events = watcher.subscribe()  # baseline taken here
    (tmp_path / "new.txt").write_text("hi")
    assert next(events) == ChangeEvent(ChangeKind.CREATED, tmp_path / "new.txt")

    # a second subscription starts from its own baseline
    again = watcher.subscribe()
    (tmp_path / "new.txt").unlink()
    assert next(again) == ChangeEvent(ChangeKind.REMOVED, tmp_path / "new.txt")


def test_async_subscription(tmp_path: Path):
    watcher = ChangeWatcher(tmp_path, LocalFS(), interval=0.01)

    async def first_event():
        events = watcher.asubscribe()
        (tmp_path / "x.bin").write_bytes(b"\x00")
        try:
            return await events.__anext__()
        finally:
            await events.aclose()

    assert asyncio.run(first_event()) == ChangeEvent(ChangeKind.CREATED, tmp_path / "x.bin")


def test_watch_requires_directory_and_positive_interval(tmp_path: Path):
    with pytest.raises(InvalidRootError):
        ChangeWatcher(tmp_path / "missing", LocalFS()).subscribe()
    with pytest.raises(ValueError):
        ChangeWatcher(tmp_path, LocalFS(), interval=0)


def test_dirmeta_watch_with_feature(tmp_path: Path):
    meta = DirMeta(tmp_path, features=DEFAULT_FEATURES | {"watcher"})
    watcher = meta.watch(interval=0.5)
    assert watcher.root == tmp_path
