"""Исключения слоя docker_api."""

from __future__ import annotations


class DockerAPIError(Exception):
    """Любая ошибка обращения к Docker Engine, приведённая к единому типу."""
