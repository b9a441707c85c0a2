# tests/unit/test_logging_config.py
import logging
import sys

import pytest

from dirmeta import logging_config


def _capture(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    return calls


def test_level_from_environment(monkeypatch):
    calls = _capture(monkeypatch)
    monkeypatch.setenv("DIRMETA_LOG_LEVEL", "debug")
    logging_config.setup_logging()
    assert calls["level"] == logging.DEBUG
    assert "%(name)s" in calls["format"]


def test_unknown_level_falls_back_to_info(monkeypatch):
    calls = _capture(monkeypatch)
    monkeypatch.setenv("DIRMETA_LOG_LEVEL", "chatty")
    logging_config.setup_logging()
    assert calls["level"] == logging.INFO


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need extra privileges on Windows")
def test_walk_logs_skipped_entries(tmp_path, caplog):
    from dirmeta import DirMeta

    (tmp_path / "ok.txt").write_text("x")
    (tmp_path / "dangling").symlink_to(tmp_path / "nowhere")
    with caplog.at_level(logging.WARNING, logger="dirmeta"):
        report = DirMeta(tmp_path).walk_sync()
    assert len(report.errors) == 1
    assert any("dangling" in r.getMessage() for r in caplog.records)


def test_explicit_level_overrides_environment(monkeypatch):
    calls = _capture(monkeypatch)
    monkeypatch.setenv("DIRMETA_LOG_LEVEL", "debug")
    logging_config.setup_logging("warning")
    assert calls["level"] == logging.WARNING
