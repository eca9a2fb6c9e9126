"""Тесты снятия метрик хоста."""

from __future__ import annotations

from types import SimpleNamespace

from dockdeck.utils import system_metrics
from dockdeck.utils.system_metrics import HostMetrics, read_host_metrics


def test_read_host_metrics_formats_values(monkeypatch) -> None:
    memory = SimpleNamespace(percent=42.3, used=2 * 1024**3, total=8 * 1024**3)
    monkeypatch.setattr(system_metrics.psutil, "virtual_memory", lambda: memory)
    monkeypatch.setattr(system_metrics.psutil, "cpu_percent", lambda interval=None: 7.0)

    assert read_host_metrics() == HostMetrics(ram="42.3% (2.0 GB/8.0 GB)", cpu="7.0%")
