"""Высокоуровневые утилиты для создания и запуска GUI приложения Docker Deck."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from PySide6 import QtWidgets

from dockdeck.docker_api.data_provider import DockerDataProvider
from dockdeck.i18n.translator import set_language
from dockdeck.settings.registry import SettingsRegistry
from dockdeck.ui.main_window import create_main_window
from dockdeck.ui.styles.theme_manager import apply_theme

APPLICATION_NAME = "Docker Deck"
ORGANIZATION_NAME = "docker-deck"


class RunnableApp(Protocol):
    """Интерфейс приложения, которое можно запустить и получить код возврата."""

    def run(self) -> int:  # pragma: no cover - протокол
        """Запускает цикл приложения и возвращает код завершения."""


@dataclass
class GUIApp:
    """Приложение PySide6: тема, язык и главное окно."""

    settings: SettingsRegistry
    docker_data_provider: DockerDataProvider
    workspace_dir: Path

    def __post_init__(self) -> None:
        self._qt_app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
        if isinstance(self._qt_app, QtWidgets.QApplication):
            self._qt_app.setApplicationName(APPLICATION_NAME)
            self._qt_app.setOrganizationName(ORGANIZATION_NAME)
            apply_theme(self._qt_app, self.settings)
        # Язык выставляется до создания окна: подписи переводятся один раз
        set_language(self.settings.get_value("app", "language", default="en"))
        self._window = create_main_window(
            settings=self.settings,
            docker_data_provider=self.docker_data_provider,
            workspace_dir=self.workspace_dir,
        )

    def run(self) -> int:
        """Запускает основной цикл приложения."""

        self._window.show()
        return self._qt_app.exec()


def create_application(
    settings: SettingsRegistry,
    docker_data_provider: DockerDataProvider,
    workspace_dir: Path,
) -> RunnableApp:
    """Фабрика GUI приложения."""

    return GUIApp(
        settings=settings,
        docker_data_provider=docker_data_provider,
        workspace_dir=workspace_dir,
    )
