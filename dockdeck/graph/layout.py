"""Раскладка графа зависимостей на холсте и поиск узла по клику.

Модуль не зависит от Qt: виджет только рисует то, что посчитано здесь.
Сети выстраиваются в верхний ряд, контейнеры в нижний; каждый второй
контейнер сдвинут вниз, чтобы подписи соседей не накладывались.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from dockdeck.docker_api.dependencies import EDGE_LINK, EDGE_NETWORK, EDGE_VOLUMES_FROM
from dockdeck.docker_api.models import RUNNING_STATE, DependencyTree

NODE_RADIUS = 30
NETWORK_ROW_Y = 100
CONTAINER_ROW_Y = 300
STAGGER_OFFSET_Y = 80
HORIZONTAL_SPACING = 150
NETWORK_SPACING = HORIZONTAL_SPACING * 1.5
LEFT_MARGIN = 100
LABEL_OFFSET_Y = NODE_RADIUS + 15
CONTAINER_LABEL_LIMIT = 15

KIND_NETWORK = "network"
KIND_CONTAINER = "container"


@dataclass(frozen=True, slots=True)
class EdgeStyle:
    """Цвет (#rrggbbaa), толщина и штрих линии связи."""

    color: str
    width: int = 2
    dash: Tuple[int, ...] = ()
    curved: bool = False


EDGE_STYLES: Dict[str, EdgeStyle] = {
    EDGE_NETWORK: EdgeStyle("#00f2ff30", curved=True),
    EDGE_VOLUMES_FROM: EdgeStyle("#ffcc0050", dash=(5, 5)),
    EDGE_LINK: EdgeStyle("#00ff9950"),
}

NETWORK_STROKE = "#00f2ff"
RUNNING_STROKE = "#00ff99"
STOPPED_STROKE = "#ff3f3f"
NODE_FILL = "#1e293b"
NETWORK_STROKE_WIDTH = 2
CONTAINER_STROKE_WIDTH = 3


@dataclass(frozen=True, slots=True)
class NodePosition:
    """Центр узла на холсте."""

    x: float
    y: float
    kind: str


@dataclass(slots=True)
class GraphLayout:
    """Позиции всех узлов по идентификатору."""

    positions: Dict[str, NodePosition] = field(default_factory=dict)

    def get(self, node_id: str) -> Optional[NodePosition]:
        return self.positions.get(node_id)

    def __len__(self) -> int:
        return len(self.positions)


def compute_layout(tree: DependencyTree) -> GraphLayout:
    """Расставляет сети и контейнеры по двум рядам."""

    layout = GraphLayout()
    for index, network in enumerate(tree.networks):
        x = LEFT_MARGIN + index * NETWORK_SPACING
        layout.positions[network.id] = NodePosition(x, NETWORK_ROW_Y, KIND_NETWORK)
    for index, container in enumerate(tree.containers):
        x = LEFT_MARGIN + index * HORIZONTAL_SPACING
        y = CONTAINER_ROW_Y + (0 if index % 2 == 0 else STAGGER_OFFSET_Y)
        layout.positions[container.id] = NodePosition(x, y, KIND_CONTAINER)
    return layout


def quadratic_control_point(start: NodePosition, end: NodePosition) -> Tuple[float, float]:
    """Контрольная точка кривой контейнер-сеть: над контейнером, на середине высоты."""

    return start.x, (start.y + end.y) / 2


def hit_test(layout: GraphLayout, x: float, y: float, radius: float = NODE_RADIUS) -> Optional[str]:
    """Возвращает идентификатор узла под точкой (последний из совпавших) или None."""

    found: Optional[str] = None
    for node_id, position in layout.positions.items():
        if math.hypot(x - position.x, y - position.y) <= radius:
            found = node_id
    return found


def truncate_label(name: str, limit: int = CONTAINER_LABEL_LIMIT) -> str:
    """Обрезает подпись контейнера до `limit` символов."""

    return name[:limit]


def container_stroke(state: str) -> str:
    """Цвет обводки контейнера: зелёный для running, красный для прочих."""

    return RUNNING_STROKE if state == RUNNING_STATE else STOPPED_STROKE


def parse_rgba(value: str) -> Tuple[int, int, int, int]:
    """Разбирает `#rrggbb` или `#rrggbbaa` в кортеж (r, g, b, a)."""

    digits = value.lstrip("#")
    if len(digits) not in (6, 8):
        raise ValueError(f"Unsupported colour: {value!r}")
    if len(digits) == 6:
        digits += "ff"
    return tuple(int(digits[index : index + 2], 16) for index in range(0, 8, 2))  # type: ignore[return-value]


def canvas_size(layout: GraphLayout) -> Tuple[int, int]:
    """Минимальный размер холста, в который помещаются все узлы с подписями."""

    if not layout.positions:
        return 0, 0
    max_x = max(position.x for position in layout.positions.values())
    max_y = max(position.y for position in layout.positions.values())
    return int(max_x + NODE_RADIUS + LEFT_MARGIN), int(max_y + LABEL_OFFSET_Y + NODE_RADIUS)
