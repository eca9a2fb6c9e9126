"""Простой переводчик строк интерфейса."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from dockdeck.settings.groups import SUPPORTED_LANGUAGES

STRINGS_DIR = Path(__file__).parent / "strings"
DEFAULT_LANGUAGE = "en"

_current_locale = DEFAULT_LANGUAGE
_translations: Dict[str, str] = {}


def set_language(language: str) -> str:
    """Загружает JSON переводы (en/pt) и возвращает применённый язык."""

    global _current_locale, _translations
    if language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE
    file_path = STRINGS_DIR / f"{language}.json"
    _translations = json.loads(file_path.read_text(encoding="utf-8"))
    _current_locale = language
    return language


def current_language() -> str:
    return _current_locale


def translate(key: str) -> str:
    """Возвращает перевод ключа или сам ключ, если перевода нет."""

    return _translations.get(key, key)


set_language(DEFAULT_LANGUAGE)
