"""Функции для работы с контейнерами через Docker client."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List

from dockdeck.docker_api.client import DOCKER_ERRORS, DockerClientWrapper
from dockdeck.docker_api.exceptions import DockerAPIError
from dockdeck.docker_api.models import RUNNING_STATE, ContainerInfo, ContainerSummary
from dockdeck.utils.helpers import short_id

# Управляющие символы, которые Docker оставляет в потоке логов (\t, \n и \r сохраняем)
CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")
DEFAULT_LOGS_TAIL = 100


def list_containers(client: DockerClientWrapper) -> List[ContainerInfo]:
    """Возвращает все контейнеры (включая остановленные) в виде view-моделей."""

    raw = client.get_raw_client()
    try:
        summaries = raw.api.containers(all=True)
    except DOCKER_ERRORS as exc:
        raise DockerAPIError(str(exc)) from exc
    return [container_from_summary(summary) for summary in summaries]


def container_from_summary(summary: Dict[str, Any]) -> ContainerInfo:
    """Преобразует запись `docker ps` (Engine API) в ContainerInfo."""

    names = summary.get("Names") or []
    name = names[0].lstrip("/") if names else short_id(summary.get("Id", ""))
    status = summary.get("Status") or ""
    return ContainerInfo(
        id=summary.get("Id", ""),
        name=name,
        state=summary.get("State") or "",
        status=status,
        image=summary.get("Image") or "",
        ports=format_ports(summary.get("Ports") or []),
        uptime=status,
    )


def format_ports(ports: Iterable[Dict[str, Any]]) -> List[str]:
    """Формирует строки `public:private` для опубликованных портов и `private` для прочих."""

    result = []
    for port in ports:
        private = port.get("PrivatePort")
        public = port.get("PublicPort")
        if public:
            result.append(f"{public}:{private}")
        elif private is not None:
            result.append(f"{private}")
    return result


def summarize(containers: Iterable[ContainerInfo]) -> ContainerSummary:
    """Считает общее число, запущенные и остановленные контейнеры."""

    summary = ContainerSummary()
    for container in containers:
        summary.total += 1
        if container.is_running:
            summary.running += 1
        else:
            summary.stopped += 1
    return summary


def status_level(state: str) -> str:
    """Уровень индикатора состояния: success (running), danger (exited) или warning."""

    if state == RUNNING_STATE:
        return "success"
    if state == "exited":
        return "danger"
    return "warning"


def start_container(client: DockerClientWrapper, container_id: str) -> None:
    """Запускает контейнер."""

    raw = client.get_raw_client()
    try:
        raw.containers.get(container_id).start()
    except DOCKER_ERRORS as exc:
        raise DockerAPIError(str(exc)) from exc


def stop_container(client: DockerClientWrapper, container_id: str) -> None:
    """Останавливает контейнер."""

    raw = client.get_raw_client()
    try:
        raw.containers.get(container_id).stop()
    except DOCKER_ERRORS as exc:
        raise DockerAPIError(str(exc)) from exc


def restart_container(client: DockerClientWrapper, container_id: str) -> None:
    """Перезапускает контейнер."""

    raw = client.get_raw_client()
    try:
        raw.containers.get(container_id).restart()
    except DOCKER_ERRORS as exc:
        raise DockerAPIError(str(exc)) from exc


def fetch_logs(
    client: DockerClientWrapper, container_id: str, *, tail: int = DEFAULT_LOGS_TAIL
) -> str:
    """Возвращает последние строки stdout/stderr с метками времени."""

    raw = client.get_raw_client()
    try:
        data = raw.containers.get(container_id).logs(
            stdout=True,
            stderr=True,
            tail=tail,
            timestamps=True,
        )
    except DOCKER_ERRORS as exc:
        raise DockerAPIError(str(exc)) from exc
    if isinstance(data, bytes):
        text = data.decode("utf-8", errors="replace")
    else:
        text = str(data)
    return clean_logs(text)


def clean_logs(text: str) -> str:
    """Удаляет управляющие символы из текста логов."""

    return CONTROL_CHARS_RE.sub("", text)


def inspect_container(client: DockerClientWrapper, container_id: str) -> Dict[str, Any]:
    """Возвращает словарь атрибутов контейнера."""

    raw = client.get_raw_client()
    try:
        container = raw.containers.get(container_id)
    except DOCKER_ERRORS as exc:
        raise DockerAPIError(str(exc)) from exc
    return getattr(container, "attrs", {})
