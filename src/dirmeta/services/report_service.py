# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterator

from ..domain.report import DirectoryReport

FORMATS = ("json", "ndjson", "csv")

CSV_FIELDS = [
    "type",
    "path",
    "name",
    "size_bytes",
    "created_ns",
    "accessed_ns",
    "modified_ns",
    "read_only",
    "symlink",
    "format_label",
    "error_kind",
    "message",
]


class ReportService:
    """
    Writes a DirectoryReport as JSON, NDJSON or CSV.

    Notes:
      - JSON (default): one object with the root, total size and the three collections.
      - NDJSON: one record per file, directory and error; each carries a "type".
      - CSV: the same records flattened with a stable column order.
      - Timestamps are written raw (UTC nanoseconds) so output does not depend on the local timezone.
    """

    def records(self, report: DirectoryReport) -> Iterator[dict[str, Any]]:
        for entry in report.files:
            yield entry.to_dict()
        for entry in report.directories:
            yield entry.to_dict()
        for error in report.errors:
            yield {"type": "error", **error.to_dict()}

    def write_report(self, report: DirectoryReport, out: Path, fmt: str = "json") -> Path:
        """
        Write `report` to `out` in the specified format.

        Returns:
            The path written.

        Raises:
            ValueError: if an unsupported format is requested.
        """
        fmt = (fmt or "json").lower()
        if fmt not in FORMATS:
            raise ValueError(f"Unsupported format: {fmt}")

        out = Path(out)
        out.parent.mkdir(parents=True, exist_ok=True)

        if fmt == "json":
            out.write_text(
                json.dumps(report.to_dict(), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            return out

        if fmt == "ndjson":
            lines = (json.dumps(rec, ensure_ascii=False) for rec in self.records(report))
            text = "\n".join(lines)
            out.write_text(text + ("\n" if text else ""), encoding="utf-8")
            return out

        with open(out, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
            writer.writeheader()
            for rec in self.records(report):
                if rec["type"] == "error":
                    row = {
                        "type": "error",
                        "path": rec["path"],
                        "error_kind": rec["kind"],
                        "message": rec["message"],
                    }
                else:
                    row = {k: rec.get(k) for k in CSV_FIELDS if k in rec}
                writer.writerow(row)
        return out
