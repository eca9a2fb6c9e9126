"""Карточки сводки по контейнерам (Total / Running / Stopped)."""

from __future__ import annotations

from PySide6 import QtWidgets

from dockdeck.docker_api.models import ContainerSummary
from dockdeck.i18n.translator import translate


class StatusCard(QtWidgets.QFrame):
    """Небольшая карточка: число сверху, подпись снизу."""

    def __init__(self, label: str, color: str, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("statusCard")
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(8, 6, 8, 6)
        layout.setSpacing(2)

        self._value_label = QtWidgets.QLabel("0")
        self._value_label.setObjectName("statusCardValue")
        self._value_label.setStyleSheet(f"color: {color};")
        layout.addWidget(self._value_label)

        caption = QtWidgets.QLabel(label)
        caption.setObjectName("statusCardLabel")
        layout.addWidget(caption)

    def set_value(self, value: int) -> None:
        self._value_label.setText(str(value))


class SummaryCards(QtWidgets.QWidget):
    """Ряд из трёх карточек со счётчиками контейнеров."""

    def __init__(
        self,
        *,
        total_color: str,
        running_color: str,
        stopped_color: str,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)
        self._total = StatusCard(translate("containers.summary.total"), total_color)
        self._running = StatusCard(translate("containers.summary.running"), running_color)
        self._stopped = StatusCard(translate("containers.summary.stopped"), stopped_color)
        for card in (self._total, self._running, self._stopped):
            layout.addWidget(card)

    def update_summary(self, summary: ContainerSummary) -> None:
        self._total.set_value(summary.total)
        self._running.set_value(summary.running)
        self._stopped.set_value(summary.stopped)
