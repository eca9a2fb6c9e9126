"""Менеджер доступа к данным Docker для интерфейса.

Файл описывает класс, который объединяет настройки подключения и функции из
`dockdeck.docker_api` для получения списка контейнеров, сетей и дерева
зависимостей, а также для выполнения базовых действий (start/stop/restart).
Операции чтения пробрасывают `DockerAPIError`, действия и логи возвращают
значение по умолчанию и пишут ошибку в журнал.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from contextlib import closing
from typing import Any, Dict, List, Optional

from dockdeck.docker_api import containers, dependencies, networks
from dockdeck.docker_api.client import DockerClientWrapper
from dockdeck.docker_api.exceptions import DockerAPIError
from dockdeck.docker_api.models import ContainerInfo, DependencyTree, NetworkNode
from dockdeck.settings.registry import SettingsRegistry

LOGGER = logging.getLogger(__name__)

LOGS_UNAVAILABLE = "Unable to fetch container logs"


class DockerDataProvider:
    """Предоставляет высокоуровневый API для работы с Docker-данными."""

    def __init__(self, settings: SettingsRegistry) -> None:
        self._settings = settings

    # ------------------------------------------------------------------ helpers
    def _create_client(self) -> DockerClientWrapper:
        """Создаёт Docker client с учётом таймаута подключения."""

        base_url = str(self._settings.get_value("docker", "base_url", default="") or "")
        timeout = int(self._settings.get_value("docker", "connection_timeout_sec", default=5))
        if timeout <= 0:
            return DockerClientWrapper(base_url)

        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(DockerClientWrapper, base_url, timeout=timeout)
        try:
            return future.result(timeout=timeout)
        except TimeoutError as exc:
            LOGGER.error(
                "Docker client creation timeout via %s after %s seconds",
                base_url or "environment",
                timeout,
            )
            raise DockerAPIError(f"Connection timeout after {timeout} seconds") from exc
        finally:
            # Зависший конструктор не должен задерживать вызывающий поток
            executor.shutdown(wait=False, cancel_futures=True)

    # ------------------------------------------------------------------- fetches
    def fetch_containers(self) -> List[ContainerInfo]:
        """Возвращает список контейнеров."""

        with closing(self._create_client()) as client:
            rows = containers.list_containers(client)
        LOGGER.debug("Fetched %s containers", len(rows))
        return rows

    def fetch_networks(self) -> List[NetworkNode]:
        """Возвращает список сетей."""

        with closing(self._create_client()) as client:
            return networks.list_networks(client)

    def fetch_dependency_tree(self) -> DependencyTree:
        """Возвращает узлы графа зависимостей."""

        with closing(self._create_client()) as client:
            return dependencies.build_dependency_tree(client)

    def engine_version(self) -> Optional[str]:
        """Возвращает версию Docker Engine или None, если он недоступен."""

        try:
            with closing(self._create_client()) as client:
                return client.version()
        except DockerAPIError as exc:
            LOGGER.warning("Docker engine is unavailable: %s", exc)
            return None

    # ---------------------------------------------------------------- operations
    def start_container(self, container_id: str) -> bool:
        """Запускает контейнер и возвращает True в случае успеха."""

        try:
            with closing(self._create_client()) as client:
                containers.start_container(client, container_id)
        except DockerAPIError as exc:
            LOGGER.error("Cannot start container %s: %s", container_id, exc)
            return False
        LOGGER.info("Container %s started", container_id)
        return True

    def stop_container(self, container_id: str) -> bool:
        """Останавливает контейнер."""

        try:
            with closing(self._create_client()) as client:
                containers.stop_container(client, container_id)
        except DockerAPIError as exc:
            LOGGER.error("Cannot stop container %s: %s", container_id, exc)
            return False
        LOGGER.info("Container %s stopped", container_id)
        return True

    def restart_container(self, container_id: str) -> bool:
        """Перезапускает контейнер."""

        try:
            with closing(self._create_client()) as client:
                containers.restart_container(client, container_id)
        except DockerAPIError as exc:
            LOGGER.error("Cannot restart container %s: %s", container_id, exc)
            return False
        LOGGER.info("Container %s restarted", container_id)
        return True

    def fetch_container_logs(self, container_id: str) -> str:
        """Возвращает логи контейнера или текст-заглушку при ошибке."""

        tail = int(
            self._settings.get_value("docker", "logs_tail", default=containers.DEFAULT_LOGS_TAIL)
        )
        try:
            with closing(self._create_client()) as client:
                return containers.fetch_logs(client, container_id, tail=tail)
        except DockerAPIError as exc:
            LOGGER.error("Cannot fetch logs for %s: %s", container_id, exc)
            return LOGS_UNAVAILABLE

    def inspect_container(self, container_id: str) -> Dict[str, Any]:
        """Возвращает результат docker inspect."""

        try:
            with closing(self._create_client()) as client:
                return containers.inspect_container(client, container_id)
        except DockerAPIError as exc:
            LOGGER.error("Cannot inspect %s: %s", container_id, exc)
            return {}
