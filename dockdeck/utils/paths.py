"""Централизованное описание путей приложения."""

from __future__ import annotations

import os
from pathlib import Path

# HOME_ENV_VAR позволяет перенести рабочую директорию (тесты, портативная установка)
HOME_ENV_VAR = "DOCKDECK_HOME"


def resolve_home_dir() -> Path:
    """Возвращает базовую директорию, внутри которой создаётся .dockdeck."""

    return Path(os.environ.get(HOME_ENV_VAR) or Path.home())


# Директория по умолчанию для config.json и логов
CONFIG_DIR = resolve_home_dir() / ".dockdeck"
