"""Классы групп настроек с валидацией значений."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from dockdeck.settings.exceptions import SettingsNotFoundError, SettingsValidationError
from dockdeck.settings.validators import (
    CompositeValidator,
    DockerURLValidator,
    EnumValidator,
    RangeValidator,
    RegexValidator,
    TypeValidator,
    Validator,
)

# Цвет вида #rrggbb или #rrggbbaa (полупрозрачные линии графа)
HEX_PATTERN = r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$"
SUPPORTED_LANGUAGES = ("en", "pt")


class SettingsGroup(ABC):
    """Абстрактная база для конкретных групп настроек."""

    group_name: str = ""

    def __init__(self) -> None:
        self._defaults: Dict[str, Any] = {}
        self._validators: Dict[str, Validator] = {}
        self._values: Dict[str, Any] = {}
        self._initialize_defaults()
        self._setup_validators()
        self.reset_to_defaults()

    @abstractmethod
    def _initialize_defaults(self) -> None:
        """Задаёт значения по умолчанию для группы."""

    @abstractmethod
    def _setup_validators(self) -> None:
        """Привязывает валидаторы к ключам группы."""

    def keys(self) -> Tuple[str, ...]:
        """Возвращает доступные ключи группы."""

        return tuple(self._defaults.keys())

    def get(self, key: str) -> Any:
        """Возвращает значение настройки."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        return self._values[key]

    def validate(self, key: str, value: Any) -> Tuple[bool, str]:
        """Применяет соответствующий валидатор и возвращает результат."""

        validator = self._validators.get(key)
        if not validator:
            return True, ""
        return validator.validate(value)

    def set(self, key: str, value: Any) -> None:
        """Сохраняет значение, выбрасывая ошибку при невалидных данных."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        is_valid, error = self.validate(key, value)
        if not is_valid:
            raise SettingsValidationError(
                key=f"{self.group_name}.{key}",
                value=value,
                reason=error,
            )
        self._values[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Возвращает копию всех значений."""

        return dict(self._values)

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Заполняет значениями из словаря; неизвестные ключи игнорируются."""

        for key, value in data.items():
            if key in self._defaults:
                self.set(key, value)

    def get_default(self, key: str) -> Any:
        """Возвращает значение по умолчанию для конкретного ключа."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        return self._defaults[key]

    def reset_to_defaults(self) -> None:
        """Сбрасывает значения группы к дефолтным."""

        self._values = dict(self._defaults)


class AppSettings(SettingsGroup):
    """Язык, тема и геометрия главного окна."""

    group_name = "app"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "language": "en",
            "theme": "dark",
            "window_width": 1280,
            "window_height": 800,
            "window_maximized": False,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "language": EnumValidator(SUPPORTED_LANGUAGES),
            "theme": EnumValidator(["dark", "light"]),
            "window_width": RangeValidator(640, 10000),
            "window_height": RangeValidator(480, 10000),
            "window_maximized": TypeValidator(bool),
        }


class LoggingSettings(SettingsGroup):
    """Настройки логирования приложения."""

    group_name = "logging"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "enabled": True,
            "level": "INFO",
            "max_file_size_mb": 10,
            "max_archived_files": 5,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "enabled": TypeValidator(bool),
            "level": EnumValidator(["DEBUG", "INFO", "WARNING", "ERROR"]),
            "max_file_size_mb": RangeValidator(1, 1000),
            "max_archived_files": RangeValidator(1, 50),
        }


class DockerSettings(SettingsGroup):
    """Подключение к Docker Engine."""

    group_name = "docker"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "base_url": "",
            "connection_timeout_sec": 5,
            "logs_tail": 100,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "base_url": DockerURLValidator(),
            "connection_timeout_sec": CompositeValidator([TypeValidator(int), RangeValidator(0, 120)]),
            "logs_tail": CompositeValidator([TypeValidator(int), RangeValidator(1, 10000)]),
        }


class RefreshSettings(SettingsGroup):
    """Интервалы автообновления экранов."""

    group_name = "refresh"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "containers_ms": 5000,
            "logs_ms": 3000,
            "dependencies_ms": 10000,
            "system_metrics_enabled": True,
            "system_metrics_ms": 3000,
        }

    def _setup_validators(self) -> None:
        interval = RangeValidator(500, 600000)
        self._validators = {
            "containers_ms": interval,
            "logs_ms": interval,
            "dependencies_ms": interval,
            "system_metrics_enabled": TypeValidator(bool),
            "system_metrics_ms": interval,
        }


class ThemeSettings(SettingsGroup):
    """Палитра интерфейса и графа зависимостей."""

    group_name = "theme"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "accent": "#00f2ff",
            "success": "#00ff99",
            "danger": "#ff3f3f",
            "warning": "#ffcc00",
            "card_dark": "#1e293b",
            "card_light": "#e2e8f0",
            "background_dark": "#0f172a",
            "background_light": "#f8fafc",
            "text_dark": "#ffffff",
            "text_light": "#0f172a",
            "muted": "#94a3b8",
            "border": "#334155",
        }

    def _setup_validators(self) -> None:
        validator = RegexValidator(HEX_PATTERN)
        self._validators = {key: validator for key in self._defaults}


class UIStateSettings(SettingsGroup):
    """Состояние интерфейса между запусками."""

    group_name = "ui_state"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "last_active_tab": 0,
            "only_running": False,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "last_active_tab": RangeValidator(0, 1),
            "only_running": TypeValidator(bool),
        }
