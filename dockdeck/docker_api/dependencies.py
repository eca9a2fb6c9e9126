"""Эвристическое дерево зависимостей: контейнеры, сети и связи между ними.

Связи восстанавливаются наивным сравнением строк: имя сети из
`NetworkSettings.Networks` сопоставляется с именем сети, а значения
`HostConfig.VolumesFrom` и `HostConfig.Links` с именем контейнера или началом
его идентификатора. Ссылки, для которых пара не нашлась, отбрасываются.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from dockdeck.docker_api.client import DOCKER_ERRORS, DockerClientWrapper
from dockdeck.docker_api.exceptions import DockerAPIError
from dockdeck.docker_api.models import ContainerNode, DependencyEdge, DependencyTree
from dockdeck.docker_api.networks import list_networks

LOGGER = logging.getLogger(__name__)

EDGE_NETWORK = "network"
EDGE_VOLUMES_FROM = "volumes_from"
EDGE_LINK = "link"

_VOLUME_MODES = (":ro", ":rw")


def build_dependency_tree(client: DockerClientWrapper) -> DependencyTree:
    """Собирает узлы графа: все контейнеры (через inspect) и все сети."""

    raw = client.get_raw_client()
    try:
        containers = raw.containers.list(all=True)
    except DOCKER_ERRORS as exc:
        raise DockerAPIError(str(exc)) from exc
    nodes = [container_node_from_attrs(getattr(container, "attrs", {})) for container in containers]
    networks = list_networks(client)
    LOGGER.debug(
        "Dependency tree built: %s containers, %s networks", len(nodes), len(networks)
    )
    return DependencyTree(containers=nodes, networks=networks)


def container_node_from_attrs(attrs: Dict[str, Any]) -> ContainerNode:
    """Преобразует результат `docker inspect` в ContainerNode."""

    config = attrs.get("Config") or {}
    host_config = attrs.get("HostConfig") or {}
    network_settings = attrs.get("NetworkSettings") or {}
    state = attrs.get("State") or {}
    return ContainerNode(
        id=attrs.get("Id", ""),
        name=(attrs.get("Name") or "").lstrip("/"),
        state=state.get("Status", "") if isinstance(state, dict) else str(state),
        image=config.get("Image") or attrs.get("Image") or "",
        networks=list((network_settings.get("Networks") or {}).keys()),
        links=list(host_config.get("Links") or []),
        volumes_from=list(host_config.get("VolumesFrom") or []),
        labels=dict(config.get("Labels") or {}),
    )


def find_container(tree: DependencyTree, reference: str) -> Optional[ContainerNode]:
    """Ищет контейнер по имени или префиксу идентификатора."""

    if not reference:
        return None
    for container in tree.containers:
        if container.name == reference or container.id.startswith(reference):
            return container
    return None


def link_target(link: str) -> str:
    """Возвращает имя контейнера из записи link (`/db:/web/db` или `db:alias`)."""

    return link.split(":", 1)[0].lstrip("/")


def volumes_from_source(reference: str) -> str:
    """Отрезает режим монтирования (`:ro`/`:rw`) от значения VolumesFrom."""

    for mode in _VOLUME_MODES:
        if reference.endswith(mode):
            return reference[: -len(mode)]
    return reference


def resolve_edges(tree: DependencyTree) -> List[DependencyEdge]:
    """Строит список связей графа в порядке отрисовки."""

    networks_by_name = {network.name: network for network in tree.networks}
    edges: List[DependencyEdge] = []
    for container in tree.containers:
        for network_name in container.networks:
            network = networks_by_name.get(network_name)
            if network is not None:
                edges.append(DependencyEdge(container.id, network.id, EDGE_NETWORK))

        for reference in container.volumes_from:
            source = find_container(tree, volumes_from_source(reference))
            if source is not None:
                edges.append(DependencyEdge(container.id, source.id, EDGE_VOLUMES_FROM))

        for link in container.links:
            target = find_container(tree, link_target(link))
            if target is not None:
                edges.append(DependencyEdge(container.id, target.id, EDGE_LINK))
    return edges
