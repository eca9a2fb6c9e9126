"""Различные вспомогательные функции."""

from __future__ import annotations

from typing import Any

SOCKET_SCHEMES = ("unix://", "tcp://", "npipe://", "http://", "https://", "ssh://")
SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def normalize_socket_path(raw_value: str) -> str:
    """Возвращает путь сокета с корректным префиксом unix://."""

    value = raw_value.strip()
    if not value:
        return value
    if value.lower().startswith(SOCKET_SCHEMES):
        return value
    if value.startswith("/"):
        return f"unix://{value}"
    return value


def format_bytes(value: Any) -> str:
    """Форматирует байты в удобочитаемый вид (`1.5 GB`)."""

    try:
        size = float(value)
    except (TypeError, ValueError):
        return "N/A"
    index = 0
    while size >= 1024 and index < len(SIZE_UNITS) - 1:
        size /= 1024.0
        index += 1
    return f"{size:.1f} {SIZE_UNITS[index]}"


def short_id(identifier: str, length: int = 12) -> str:
    """Короткая форма идентификатора Docker, как в `docker ps`."""

    if identifier.startswith("sha256:"):
        identifier = identifier[len("sha256:") :]
    return identifier[:length]
