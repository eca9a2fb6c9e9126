"""Точка входа в приложение Docker Deck."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from dockdeck import __version__
from dockdeck.app import create_application
from dockdeck.docker_api.data_provider import DockerDataProvider
from dockdeck.settings.exceptions import SettingsError
from dockdeck.settings.observers import LoggingSettingsObserver, LogLevelObserver
from dockdeck.settings.registry import SettingsRegistry
from dockdeck.utils.logger import configure_logging
from dockdeck.utils.paths import resolve_home_dir

LOGGER = logging.getLogger(__name__)

WORKDIR_NAME = ".dockdeck"


def initialize_settings(config_path: Path) -> SettingsRegistry:
    """Получает singleton реестр настроек и загружает config.json."""

    registry = SettingsRegistry(config_path=config_path)
    registry.load_from_disk()
    return registry


def setup_logging_from_settings(base_dir: Path, settings: SettingsRegistry) -> None:
    """Настраивает логирование в соответствии с LoggingSettings."""

    logging_settings = settings.get_group("logging")
    if not logging_settings.get("enabled"):
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    configure_logging(
        log_dir=base_dir / "logs",
        level_name=logging_settings.get("level"),
        max_bytes=logging_settings.get("max_file_size_mb") * 1024 * 1024,
        backup_count=logging_settings.get("max_archived_files"),
    )


def initialize_workdir(base_dir: Path) -> bool:
    """Создаёт рабочую структуру (~/.dockdeck и ~/.dockdeck/logs)."""

    try:
        (base_dir / "logs").mkdir(parents=True, exist_ok=True)
        return True
    except OSError as exc:
        LOGGER.error("Cannot initialize working directory %s: %s", base_dir, exc)
        return False


def main() -> int:
    """Основная точка входа: готовит окружение и запускает приложение."""

    base_dir = resolve_home_dir() / WORKDIR_NAME
    if not initialize_workdir(base_dir):
        return 1
    configure_logging(base_dir / "logs")

    try:
        settings = initialize_settings(base_dir / "config.json")
    except SettingsError as exc:
        LOGGER.error("Cannot load settings: %s", exc)
        return 1
    setup_logging_from_settings(base_dir, settings)
    settings.register_observer(LoggingSettingsObserver())
    settings.register_observer(LogLevelObserver())

    docker_data_provider = DockerDataProvider(settings)

    LOGGER.info("Starting Docker Deck %s", __version__)
    app = create_application(
        settings=settings,
        docker_data_provider=docker_data_provider,
        workspace_dir=base_dir,
    )
    return app.run()


def run() -> None:
    """Точка входа для console/gui скрипта `dockdeck`."""

    sys.exit(main())


if __name__ == "__main__":
    run()
