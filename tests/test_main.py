"""Тесты вспомогательных функций модуля main."""

from __future__ import annotations

import logging
from pathlib import Path

from dockdeck.main import initialize_workdir, setup_logging_from_settings
from dockdeck.settings.groups import LoggingSettings


class DummySettings:
    def __init__(self, enabled: bool = True, level: str = "INFO") -> None:
        self.logging = LoggingSettings()
        self.logging.set("enabled", enabled)
        self.logging.set("level", level)

    def get_group(self, name: str):  # type: ignore[override]
        if name == "logging":
            return self.logging
        raise KeyError(name)


def test_initialize_workdir_creates_structure(tmp_path: Path) -> None:
    base_dir = tmp_path / ".dockdeck"
    assert initialize_workdir(base_dir)
    assert (base_dir / "logs").is_dir()
    assert initialize_workdir(base_dir)


def test_initialize_workdir_reports_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "occupied"
    blocker.write_text("", encoding="utf-8")
    assert initialize_workdir(blocker) is False


def test_setup_logging_enabled_creates_log(tmp_path: Path) -> None:
    logging.disable(logging.NOTSET)
    settings = DummySettings(enabled=True, level="INFO")
    setup_logging_from_settings(tmp_path, settings)
    logger = logging.getLogger("test")
    logger.info("log entry")
    for handler in logging.getLogger().handlers:
        handler.flush()
    log_file = tmp_path / "logs" / "app.log"
    assert log_file.exists()
    assert "log entry" in log_file.read_text(encoding="utf-8")


def test_setup_logging_disabled(tmp_path: Path) -> None:
    logging.disable(logging.NOTSET)
    settings = DummySettings(enabled=False)
    setup_logging_from_settings(tmp_path, settings)
    assert logging.root.manager.disable >= logging.CRITICAL
    logging.disable(logging.NOTSET)
