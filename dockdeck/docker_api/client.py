"""Обёртка над docker-py с безопасной инициализацией."""

from __future__ import annotations

import logging
from typing import Any

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from dockdeck.docker_api.exceptions import DockerAPIError
from dockdeck.utils.helpers import normalize_socket_path

LOGGER = logging.getLogger(__name__)

# docker-py не оборачивает ошибки requests, возникшие после создания клиента
DOCKER_ERRORS = (DockerException, RequestException)


class DockerClientWrapper:
    """Управляет созданием и использованием docker API client."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: int | None = None,
        raw_client: Any | None = None,
    ) -> None:
        self.base_url = normalize_socket_path(base_url or "")  # Пустая строка: окружение
        self.timeout = timeout
        self._client = raw_client or self._create_client()

    def _create_client(self) -> Any:
        kwargs: dict[str, Any] = {}
        if self.timeout:
            kwargs["timeout"] = self.timeout
        try:
            if not self.base_url:
                return docker.from_env(**kwargs)
            return docker.DockerClient(base_url=self.base_url, **kwargs)
        except DOCKER_ERRORS as exc:
            LOGGER.error(
                "Docker client init error via %s: %s",
                self.base_url or "environment",
                exc,
            )
            raise DockerAPIError(str(exc)) from exc

    def get_raw_client(self) -> Any:
        """Возвращает внутренний docker client."""

        return self._client

    def ping(self) -> bool:
        """Проверяет доступность Docker."""

        try:
            self._client.ping()
            return True
        except DOCKER_ERRORS as exc:
            LOGGER.error("Docker ping failed: %s", exc)
            return False

    def version(self) -> str:
        """Возвращает версию Docker Engine."""

        try:
            version_info = self._client.version()
        except DOCKER_ERRORS as exc:
            raise DockerAPIError(str(exc)) from exc
        return str(version_info.get("Version", "unknown"))

    def close(self) -> None:
        """Закрывает HTTP-сессию и пул соединений docker client."""

        try:
            self._client.close()
        except DOCKER_ERRORS as exc:
            LOGGER.warning("Docker client close failed: %s", exc)
