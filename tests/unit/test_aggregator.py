# tests/unit/test_aggregator.py
from pathlib import Path

from dirmeta.config import DEFAULT_FEATURES
from dirmeta.domain import DirectoryEntry, ErrorKind, FileEntry, PartialResult, WalkError
from dirmeta.services import aggregator


def _file(path: str, size: int) -> PartialResult:
    p = Path(path)
    return PartialResult.of_file(FileEntry(name=p.name, absolute_path=p, size_bytes=size))


def _error(path: str) -> PartialResult:
    return PartialResult.of_error(WalkError(Path(path), ErrorKind.NOT_FOUND, "gone"))


def _as_sets(p: PartialResult):
    return p.size_bytes, set(p.files), set(p.directories), set(p.errors)


def test_merge_adds_sizes_and_concatenates():
    merged = aggregator.merge(_file("/r/a", 10), _file("/r/b", 5))
    assert merged.size_bytes == 15
    assert [f.name for f in merged.files] == ["a", "b"]


def test_merge_is_associative_and_commutative_as_sets():
    a, b, c = _file("/r/a", 1), _error("/r/x"), _file("/r/c", 3)
    left = aggregator.merge(aggregator.merge(a, b), c)
    right = aggregator.merge(a, aggregator.merge(b, c))
    assert left == right
    assert _as_sets(aggregator.merge(a, c)) == _as_sets(aggregator.merge(c, a))


def test_fold_matches_chained_merge():
    parts = [_file("/r/a", 1), _error("/r/x"), _file("/r/c", 3)]
    chained = aggregator.merge(aggregator.merge(parts[0], parts[1]), parts[2])
    assert aggregator.fold(parts) == chained
    assert aggregator.fold([]) == PartialResult.empty()


def test_of_directory_keeps_nested_results_and_lists_dir_last():
    nested = aggregator.fold([_file("/r/sub/b", 20), _error("/r/sub/gone")])
    entry = DirectoryEntry(name="sub", absolute_path=Path("/r/sub"), size_bytes=nested.size_bytes)
    part = PartialResult.of_directory(entry, nested)
    assert part.size_bytes == 20
    assert part.files == nested.files
    assert part.errors == nested.errors
    assert part.directories[-1] is entry


def test_failed_subtree_is_not_discarded():
    nested = _error("/r/locked")
    entry = DirectoryEntry(name="locked", absolute_path=Path("/r/locked"))
    total = aggregator.fold([_file("/r/a", 1), PartialResult.of_directory(entry, nested)])
    assert len(total.errors) == 1
    assert total.directories == (entry,)


def test_to_report_carries_features():
    report = aggregator.to_report(Path("/r"), _file("/r/a", 7), frozenset({"size"}))
    assert report.total_size_bytes == 7
    assert report.total_size_human() == "7 B"
    assert report.root == Path("/r")


def test_to_report_defaults_to_default_features():
    report = aggregator.to_report(Path("/r"), _file("/r/a", 2048))
    assert report.features == DEFAULT_FEATURES
    assert report.total_size_human() == "2.00 KiB"
