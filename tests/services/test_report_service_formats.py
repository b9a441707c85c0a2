# tests/services/test_report_service_formats.py
import csv
import json
from pathlib import Path

import pytest

from dirmeta.domain import DirectoryEntry, DirectoryReport, ErrorKind, FileEntry, WalkError
from dirmeta.services.report_service import CSV_FIELDS, ReportService


def _report() -> DirectoryReport:
    a = FileEntry(name="a.txt", absolute_path=Path("/r/a.txt"), size_bytes=10,
                  modified_at=5, format_label="TEXT")
    b = FileEntry(name="b.txt", absolute_path=Path("/r/sub/b.txt"), size_bytes=20)
    sub = DirectoryEntry(name="sub", absolute_path=Path("/r/sub"), size_bytes=20)
    err = WalkError(Path("/r/locked"), ErrorKind.PERMISSION_DENIED, "Permission denied", 13)
    return DirectoryReport(
        root=Path("/r"), total_size_bytes=30, files=(a, b), directories=(sub,), errors=(err,)
    )


def test_json_defaults(tmp_path: Path):
    out = tmp_path / "nested" / "report.json"
    path = ReportService().write_report(_report(), out)
    assert path == out
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["root"] == str(Path("/r"))
    assert data["total_size_bytes"] == 30
    assert [f["name"] for f in data["files"]] == ["a.txt", "b.txt"]
    assert data["files"][0]["modified_ns"] == 5
    assert data["directories"][0]["size_bytes"] == 20
    assert data["errors"][0]["kind"] == "permission_denied"


def test_ndjson_one_record_per_line(tmp_path: Path):
    out = ReportService().write_report(_report(), tmp_path / "r.ndjson", fmt="NDJSON")
    lines = out.read_text(encoding="utf-8").splitlines()
    types = [json.loads(line)["type"] for line in lines]
    assert types == ["file", "file", "directory", "error"]


def test_ndjson_empty_report(tmp_path: Path):
    empty = DirectoryReport(root=Path("/r"), total_size_bytes=0)
    out = ReportService().write_report(empty, tmp_path / "e.ndjson", fmt="ndjson")
    assert out.read_text(encoding="utf-8") == ""


def test_csv_stable_columns(tmp_path: Path):
    out = ReportService().write_report(_report(), tmp_path / "r.csv", fmt="csv")
    with open(out, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        assert reader.fieldnames == CSV_FIELDS
        rows = list(reader)
    assert [r["type"] for r in rows] == ["file", "file", "directory", "error"]
    assert rows[0]["format_label"] == "TEXT"
    assert rows[3]["error_kind"] == "permission_denied"
    assert rows[3]["size_bytes"] == ""


def test_unsupported_format(tmp_path: Path):
    with pytest.raises(ValueError):
        ReportService().write_report(_report(), tmp_path / "r.xml", fmt="xml")
