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

"""
Human-facing renderings of raw walk attributes.

All functions are pure: timestamps come in as nanoseconds since the Unix
epoch and are converted to local time only here, at read time.
"""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

SIZE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")

NS_PER_SECOND = 1_000_000_000

# (seconds, singular, plural); calendar units use the Julian year average
_DURATION_UNITS = (
    (31_557_600, "year", "years"),
    (2_630_016, "month", "months"),
    (86_400, "day", "days"),
    (3_600, "h", "h"),
    (60, "m", "m"),
    (1, "s", "s"),
)


def _local(timestamp_ns: int) -> datetime:
    return datetime.fromtimestamp(timestamp_ns / NS_PER_SECOND)


def _date_part(dt: datetime) -> str:
    # e.g. "Sunday, 18 October, 2026"; built by hand since %-d is not portable
    return f"{dt:%A}, {dt.day} {dt:%B}, {dt.year}"


def to_local_24h(timestamp_ns: int) -> str:
    """Render as local date plus 24 hour clock, e.g. `Sunday, 18 October, 2026 14:05:09`."""
    dt = _local(timestamp_ns)
    return f"{_date_part(dt)} {dt:%H:%M:%S}"


def to_local_12h(timestamp_ns: int) -> str:
    """Render as local date plus 12 hour clock, e.g. `Sunday, 18 October, 2026 2:05 PM`."""
    dt = _local(timestamp_ns)
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{_date_part(dt)} {hour}:{dt:%M} {meridiem}"


def to_relative_duration(timestamp_ns: int, now_ns: Optional[int] = None) -> Optional[str]:
    """
    Time elapsed between `timestamp_ns` and `now_ns` (default: the current
    time) in the compact `1day 2h 3m 4s` style.

    Returns None when the timestamp lies after `now_ns`.
    """
    if now_ns is None:
        now_ns = time.time_ns()
    if timestamp_ns > now_ns:
        return None

    remaining = (now_ns - timestamp_ns) // NS_PER_SECOND
    parts = []
    for seconds, singular, plural in _DURATION_UNITS:
        count, remaining = divmod(remaining, seconds)
        if count:
            parts.append(f"{count}{singular if count == 1 else plural}")
    return " ".join(parts) if parts else "0s"


def to_scaled_size(size_bytes: int) -> str:
    """
    Scale a byte count to the largest binary unit whose value is at least 1.

    Values below 1024 stay unscaled integers (`0 B`, `512 B`); larger values
    get two decimals (`1.50 KiB`).
    """
    if size_bytes < 0:
        raise ValueError("size must be non-negative")
    if size_bytes < 1024:
        return f"{size_bytes} B"

    value = float(size_bytes)
    unit = 0
    # compare the value as printed, so 1048575 reads 1.00 MiB rather than 1024.00 KiB
    while round(value, 2) >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.2f} {SIZE_UNITS[unit]}"


def detect_format(source: Union[bytes, str, Path]) -> Optional[str]:
    """Content-format label for raw bytes or a file path, using the default detector chain."""
    from .adapters.format import default_detector

    detector = default_detector()
    if isinstance(source, (bytes, bytearray)):
        return detector.detect_bytes(bytes(source))
    return detector.detect(Path(source))
