"""Тесты фоновой задачи DockerTask (без запуска потока и окон)."""

from __future__ import annotations

import pytest
from PySide6 import QtCore

from dockdeck.docker_api.exceptions import DockerAPIError
from dockdeck.ui.workers import DockerTask


@pytest.fixture(scope="module")
def core_app() -> QtCore.QCoreApplication:
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


def run_inline(func) -> tuple[list, list]:
    """Выполняет тело задачи в текущем потоке и собирает сигналы."""

    results: list = []
    errors: list = []
    task = DockerTask(func, name="inline-task")
    task.data_ready.connect(results.append)
    task.error.connect(errors.append)
    task.run()
    return results, errors


def test_result_is_emitted(core_app) -> None:
    results, errors = run_inline(lambda: [1, 2])
    assert results == [[1, 2]]
    assert errors == []


def test_docker_error_is_emitted(core_app) -> None:
    def broken() -> None:
        raise DockerAPIError("Cannot connect to the Docker daemon")

    results, errors = run_inline(broken)
    assert results == []
    assert errors == ["Cannot connect to the Docker daemon"]


def test_unexpected_error_is_logged_and_emitted(core_app, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("ERROR")

    def broken() -> None:
        raise KeyError("State")

    results, errors = run_inline(broken)
    assert results == []
    assert errors == ["'State'"]
    assert "inline-task crashed" in caplog.text
