"""Футер приложения: статус Docker Engine и загрузка хоста."""

from __future__ import annotations

from PySide6 import QtWidgets

from dockdeck.i18n.translator import translate
from dockdeck.utils.system_metrics import HostMetrics


class FooterWidget(QtWidgets.QWidget):
    """Нижняя панель с короткими статусами."""

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.setSpacing(24)

        self._engine_label = QtWidgets.QLabel(translate("footer.engine_checking"))
        layout.addWidget(self._engine_label)

        self._stats_label = QtWidgets.QLabel()
        self._stats_label.setObjectName("mutedLabel")
        layout.addWidget(self._stats_label)
        layout.addStretch()
        self.update_stats(HostMetrics(ram="N/A", cpu="N/A"))

    def update_engine_status(self, version: str | None) -> None:
        """Показывает версию движка или сообщение о его недоступности."""

        if version is None:
            self._engine_label.setText(translate("footer.engine_unavailable"))
        else:
            self._engine_label.setText(translate("footer.engine_running").format(version=version))

    def update_stats(self, metrics: HostMetrics) -> None:
        self._stats_label.setText(
            f"{translate('footer.stat_ram')}: {metrics.ram}   "
            f"{translate('footer.stat_cpu')}: {metrics.cpu}"
        )

    def set_stats_visible(self, visible: bool) -> None:
        self._stats_label.setVisible(visible)
