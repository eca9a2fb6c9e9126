"""Функции для работы с сетями Docker."""

from __future__ import annotations

from typing import Any, Dict, List

from dockdeck.docker_api.client import DOCKER_ERRORS, DockerClientWrapper
from dockdeck.docker_api.exceptions import DockerAPIError
from dockdeck.docker_api.models import NetworkNode


def list_networks(client: DockerClientWrapper) -> List[NetworkNode]:
    """Возвращает все сети вместе с идентификаторами подключённых контейнеров."""

    raw = client.get_raw_client()
    try:
        networks = raw.networks.list(greedy=True)  # greedy: заполняет Containers
    except DOCKER_ERRORS as exc:
        raise DockerAPIError(str(exc)) from exc
    return [network_from_attrs(getattr(network, "attrs", {})) for network in networks]


def network_from_attrs(attrs: Dict[str, Any]) -> NetworkNode:
    """Преобразует атрибуты `docker network inspect` в NetworkNode."""

    return NetworkNode(
        id=attrs.get("Id", ""),
        name=attrs.get("Name", ""),
        driver=attrs.get("Driver") or "",
        scope=attrs.get("Scope") or "",
        containers=list((attrs.get("Containers") or {}).keys()),
    )
