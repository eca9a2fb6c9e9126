"""Фоновые задачи запросов к Docker API для разгрузки UI."""

from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6 import QtCore

from dockdeck.docker_api.exceptions import DockerAPIError

LOGGER = logging.getLogger(__name__)


class DockerTask(QtCore.QThread):
    """Выполняет один вызов DockerDataProvider вне UI-потока.

    Результат приходит сигналом `data_ready`, любая ошибка вызова сигналом `error`.
    Если прерывание запрошено до завершения вызова, результат не отправляется.
    """

    data_ready = QtCore.Signal(object)
    error = QtCore.Signal(str)

    def __init__(
        self,
        func: Callable[..., Any],
        *args: Any,
        name: str = "docker-task",
        parent: QtCore.QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._func = func
        self._args = args
        self.setObjectName(name)

    def run(self) -> None:
        if self.isInterruptionRequested():
            return
        try:
            result = self._func(*self._args)
        except DockerAPIError as exc:
            LOGGER.error("Task %s failed: %s", self.objectName(), exc)
            if not self.isInterruptionRequested():
                self.error.emit(str(exc))
            return
        except Exception as exc:
            LOGGER.exception("Task %s crashed", self.objectName())
            if not self.isInterruptionRequested():
                self.error.emit(str(exc) or type(exc).__name__)
            return
        if not self.isInterruptionRequested():
            self.data_ready.emit(result)


def start_task(
    owner: QtCore.QObject,
    func: Callable[..., Any],
    *args: Any,
    on_ready: Callable[[Any], None],
    on_error: Callable[[str], None] | None = None,
    on_finished: Callable[[], None] | None = None,
    name: str = "docker-task",
) -> DockerTask:
    """Создаёт и запускает DockerTask с подключёнными обработчиками."""

    task = DockerTask(func, *args, name=name, parent=owner)
    task.data_ready.connect(on_ready)
    if on_error is not None:
        task.error.connect(on_error)
    if on_finished is not None:
        task.finished.connect(on_finished)
    task.finished.connect(task.deleteLater)
    task.start()
    return task
