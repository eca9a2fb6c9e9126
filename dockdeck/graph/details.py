"""Содержимое боковой панели для выбранного узла графа."""

from __future__ import annotations

from typing import List, Tuple, Union

from dockdeck.docker_api.models import ContainerNode, NetworkNode

# (ключ перевода подписи, значения); список значений выводится построчно
DetailRow = Tuple[str, List[str]]

NETWORKS_ROW = "dependencies.node.networks"
LINKS_ROW = "dependencies.node.links"
VOLUMES_FROM_ROW = "dependencies.node.volumes_from"
LIST_ROW_KEYS = (NETWORKS_ROW, LINKS_ROW, VOLUMES_FROM_ROW)


def node_details(node: Union[ContainerNode, NetworkNode]) -> List[DetailRow]:
    """Строки панели для сети или контейнера.

    Для сети выводятся драйвер, scope и число подключённых контейнеров; для
    контейнера образ, состояние и непустые списки сетей, links и volumes_from.
    """

    rows: List[DetailRow] = [("dependencies.node.name", [node.name])]
    if isinstance(node, NetworkNode):
        rows.append(("dependencies.node.driver", [node.driver]))
        rows.append(("dependencies.node.scope", [node.scope]))
        rows.append(("dependencies.node.attached", [str(len(node.containers))]))
        return rows

    rows.append(("dependencies.node.image", [node.image]))
    rows.append(("dependencies.node.state", [node.state]))
    for key, values in (
        (NETWORKS_ROW, node.networks),
        (LINKS_ROW, node.links),
        (VOLUMES_FROM_ROW, node.volumes_from),
    ):
        if values:
            rows.append((key, list(values)))
    return rows


def node_title_key(node: Union[ContainerNode, NetworkNode]) -> str:
    if isinstance(node, NetworkNode):
        return "dependencies.node.network_title"
    return "dependencies.node.container_title"
