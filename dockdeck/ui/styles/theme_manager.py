"""Менеджер тем: загрузка QSS-шаблона и применение палитры к приложению."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from PySide6 import QtWidgets

from dockdeck.settings.groups import SettingsGroup
from dockdeck.settings.registry import SettingsRegistry

STYLE_DIR = Path(__file__).parent


def apply_theme(app: QtWidgets.QApplication, settings: SettingsRegistry) -> None:
    """Применяет цвета темы (dark/light) ко всем виджетам."""

    variant = settings.get_value("app", "theme", default="dark")
    template = (STYLE_DIR / f"{variant}_theme.qss").read_text(encoding="utf-8")
    palette = build_palette(settings.get_group("theme"), variant)
    app.setStyleSheet(template.format(**palette))


def build_palette(theme_group: SettingsGroup, variant: str) -> Dict[str, str]:
    """Подставляет в шаблон цвета нужного варианта темы."""

    suffix = "dark" if variant == "dark" else "light"
    return {
        "accent": theme_group.get("accent"),
        "success": theme_group.get("success"),
        "danger": theme_group.get("danger"),
        "warning": theme_group.get("warning"),
        "card": theme_group.get(f"card_{suffix}"),
        "background": theme_group.get(f"background_{suffix}"),
        "text": theme_group.get(f"text_{suffix}"),
        "muted": theme_group.get("muted"),
        "border": theme_group.get("border"),
    }
