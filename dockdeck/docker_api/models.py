"""Упрощённые структуры данных для описания объектов Docker."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

RUNNING_STATE = "running"


@dataclass(slots=True)
class ContainerInfo:
    """Строка списка контейнеров в том виде, в каком её показывает UI."""

    id: str
    name: str
    state: str
    status: str
    image: str
    ports: List[str] = field(default_factory=list)
    uptime: str = ""

    @property
    def is_running(self) -> bool:
        return self.state == RUNNING_STATE

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует модель в dict (строка таблицы)."""

        return asdict(self)


@dataclass(slots=True)
class ContainerSummary:
    """Счётчики для карточек сводки."""

    total: int = 0
    running: int = 0
    stopped: int = 0


@dataclass(slots=True)
class ContainerNode:
    """Контейнер как узел графа зависимостей."""

    id: str
    name: str
    state: str
    image: str
    networks: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    volumes_from: List[str] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    type: str = "container"

    @property
    def is_running(self) -> bool:
        return self.state == RUNNING_STATE


@dataclass(slots=True)
class NetworkNode:
    """Сеть Docker как узел графа зависимостей."""

    id: str
    name: str
    driver: str
    scope: str
    containers: List[str] = field(default_factory=list)
    type: str = "network"


@dataclass(slots=True)
class DependencyEdge:
    """Связь между двумя узлами графа."""

    source: str
    target: str
    kind: str  # network, volumes_from или link


@dataclass(slots=True)
class DependencyTree:
    """Полный набор узлов для отрисовки."""

    containers: List[ContainerNode] = field(default_factory=list)
    networks: List[NetworkNode] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.containers and not self.networks
