"""Метрики хоста для футера (psutil)."""

from __future__ import annotations

from dataclasses import dataclass

import psutil

from dockdeck.utils.helpers import format_bytes


@dataclass(slots=True)
class HostMetrics:
    """Загрузка RAM и CPU машины, на которой работает Docker Deck."""

    ram: str
    cpu: str


def read_host_metrics() -> HostMetrics:
    """Снимает текущие показатели RAM и CPU."""

    memory = psutil.virtual_memory()
    cpu_percent = psutil.cpu_percent(interval=None)
    return HostMetrics(
        ram=f"{memory.percent:.1f}% ({format_bytes(memory.used)}/{format_bytes(memory.total)})",
        cpu=f"{cpu_percent:.1f}%",
    )
