# tests/unit/test_formatting.py
from datetime import datetime

import pytest

from dirmeta import formatting
from dirmeta.formatting import (
    NS_PER_SECOND,
    to_local_12h,
    to_local_24h,
    to_relative_duration,
    to_scaled_size,
)


def _local_ns(*args) -> int:
    return int(datetime(*args).timestamp()) * NS_PER_SECOND


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (1, "1 B"),
        (1023, "1023 B"),
        (1024, "1.00 KiB"),
        (1536, "1.50 KiB"),
        (1023 * 1024, "1023.00 KiB"),
        (1024**2 - 1, "1.00 MiB"),
        (1024**3 - 1, "1.00 GiB"),
        (5 * 1024**2, "5.00 MiB"),
        (3 * 1024**3 + 512 * 1024**2, "3.50 GiB"),
        (2 * 1024**4, "2.00 TiB"),
    ],
)
def test_scaled_size(size, expected):
    assert to_scaled_size(size) == expected


def test_scaled_size_rejects_negative():
    with pytest.raises(ValueError):
        to_scaled_size(-1)


def test_scaled_size_caps_at_largest_unit():
    assert to_scaled_size(2048 * 1024**8).endswith(" YiB")


def test_local_24h_and_12h_afternoon():
    ns = _local_ns(2024, 3, 5, 14, 7, 9)
    assert to_local_24h(ns) == "Tuesday, 5 March, 2024 14:07:09"
    assert to_local_12h(ns) == "Tuesday, 5 March, 2024 2:07 PM"


def test_local_12h_midnight_and_noon():
    assert to_local_12h(_local_ns(2024, 3, 5, 0, 5)).endswith(" 12:05 AM")
    assert to_local_12h(_local_ns(2024, 3, 5, 12, 0)).endswith(" 12:00 PM")


def test_formatting_is_idempotent():
    ns = _local_ns(2023, 12, 31, 23, 59, 59)
    assert to_local_24h(ns) == to_local_24h(ns)
    assert to_local_12h(ns) == to_local_12h(ns)
    assert to_relative_duration(0, ns) == to_relative_duration(0, ns)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0s"),
        (3, "3s"),
        (3_723, "1h 2m 3s"),
        (90_061, "1day 1h 1m 1s"),
        (2 * 86_400, "2days"),
        (2_630_016, "1month"),
        (31_557_600 * 2 + 5, "2years 5s"),
    ],
)
def test_relative_duration(seconds, expected):
    now = 1_700_000_000 * NS_PER_SECOND
    assert to_relative_duration(now - seconds * NS_PER_SECOND, now) == expected


def test_relative_duration_drops_subsecond_part():
    assert to_relative_duration(0, NS_PER_SECOND + 999_999_999) == "1s"


def test_relative_duration_in_future_is_none():
    assert to_relative_duration(10 * NS_PER_SECOND, 5 * NS_PER_SECOND) is None


def test_relative_duration_defaults_to_now(monkeypatch):
    monkeypatch.setattr(formatting.time, "time_ns", lambda: 65 * NS_PER_SECOND)
    assert to_relative_duration(0) == "1m 5s"
