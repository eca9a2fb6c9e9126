"""Тесты полноценного SettingsRegistry."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Tuple

import pytest

from dockdeck.settings.exceptions import (
    SettingsIOError,
    SettingsNotFoundError,
    SettingsValidationError,
)
from dockdeck.settings.registry import SettingsRegistry


class DummyObserver:
    """Простой наблюдатель для проверки уведомлений."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, str, object, object]] = []

    def on_setting_changed(
        self, group: str, key: str, old_value: object, new_value: object
    ) -> None:
        self.events.append((group, key, old_value, new_value))


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


@pytest.fixture
def registry(config_path: Path) -> SettingsRegistry:
    SettingsRegistry._instance = None  # type: ignore[attr-defined]
    registry = SettingsRegistry(config_path)
    registry.reset_to_defaults()
    yield registry
    SettingsRegistry._instance = None  # type: ignore[attr-defined]


def test_singleton_instance(registry: SettingsRegistry) -> None:
    another = SettingsRegistry()
    assert registry is another


def test_get_and_set_value(registry: SettingsRegistry) -> None:
    registry.set_value("app", "language", "pt")
    assert registry.get_value("app", "language") == "pt"


def test_get_value_with_default(registry: SettingsRegistry) -> None:
    assert registry.get_value("app", "unknown", default="fallback") == "fallback"


def test_set_value_invalid_raises(registry: SettingsRegistry) -> None:
    with pytest.raises(SettingsValidationError):
        registry.set_value("app", "language", "de")


def test_unknown_group_raises(registry: SettingsRegistry) -> None:
    with pytest.raises(SettingsNotFoundError):
        registry.get_value("unknown", "key")


def test_save_and_load_persists_data(config_path: Path, registry: SettingsRegistry) -> None:
    registry.set_value("app", "language", "pt")
    registry.save_to_disk()

    SettingsRegistry._instance = None  # type: ignore[attr-defined]
    loaded = SettingsRegistry(config_path)
    loaded.load_from_disk()
    assert loaded.get_value("app", "language") == "pt"


def test_load_creates_defaults_if_missing(tmp_path: Path) -> None:
    SettingsRegistry._instance = None  # type: ignore[attr-defined]
    config_path = tmp_path / "missing.json"
    registry = SettingsRegistry(config_path)
    registry.load_from_disk()
    assert config_path.exists()


def test_observer_notification(registry: SettingsRegistry) -> None:
    observer = DummyObserver()
    registry.register_observer(observer)
    registry.set_value("app", "language", "pt")
    assert observer.events[-1] == ("app", "language", "en", "pt")


def test_save_to_explicit_path(tmp_path: Path, registry: SettingsRegistry) -> None:
    export_path = tmp_path / "backup" / "export.json"
    registry.set_value("logging", "level", "DEBUG")
    registry.save_to_disk(export_path)
    assert json.loads(export_path.read_text(encoding="utf-8"))["version"] == "1.0.0"

    registry.set_value("logging", "level", "INFO")
    registry.load_from_disk(export_path)
    assert registry.get_value("logging", "level") == "DEBUG"


def test_load_rejects_broken_json(config_path: Path, registry: SettingsRegistry) -> None:
    config_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsIOError):
        registry.load_from_disk()


def test_load_keeps_metadata_and_skips_unknown_keys(
    config_path: Path, registry: SettingsRegistry
) -> None:
    payload = {
        "version": "0.3.0",
        "refresh": {"containers_ms": 2500, "obsolete": True},
        "docker": {"base_url": "unix:///run/user/1000/docker.sock"},
    }
    config_path.write_text(json.dumps(payload), encoding="utf-8")
    registry.load_from_disk()
    assert registry.get_value("refresh", "containers_ms") == 2500
    assert registry.get_value("docker", "base_url") == "unix:///run/user/1000/docker.sock"
    assert registry.get_value("refresh", "logs_ms") == 3000
    assert registry.is_dirty is False


def test_load_rejects_invalid_values(config_path: Path, registry: SettingsRegistry) -> None:
    config_path.write_text(json.dumps({"app": {"theme": "neon"}}), encoding="utf-8")
    with pytest.raises(SettingsValidationError):
        registry.load_from_disk()


def test_same_value_does_not_notify(registry: SettingsRegistry) -> None:
    observer = DummyObserver()
    registry.register_observer(observer)
    registry.set_value("refresh", "containers_ms", 5000)
    assert observer.events == []
