"""Экран контейнеров: боковая панель со списком и панель деталей с логами."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from PySide6 import QtCore, QtGui, QtWidgets

from dockdeck.docker_api import containers as container_ops
from dockdeck.docker_api.data_provider import LOGS_UNAVAILABLE, DockerDataProvider
from dockdeck.docker_api.models import RUNNING_STATE, ContainerInfo
from dockdeck.i18n.translator import translate
from dockdeck.settings.registry import SettingsRegistry
from dockdeck.ui.dialogs.container_details import ContainerDetailsDialog
from dockdeck.ui.widgets.summary import SummaryCards
from dockdeck.ui.widgets.tables import ColumnDefinition, ResourceTable
from dockdeck.ui.workers import DockerTask, start_task

LOGGER = logging.getLogger(__name__)

STATUS_DOT_SIZE = 12


def format_ports_cell(ports: Any) -> str:
    if not ports:
        return translate("containers.no_ports")
    return ", ".join(str(port) for port in ports)


class ContainersView(QtWidgets.QWidget):
    """Список контейнеров с кнопками управления и автообновлением.

    Список перечитывается по таймеру `refresh.containers_ms`; логи выбранного
    контейнера перечитываются по `refresh.logs_ms`, пока он запущен.
    """

    status_message = QtCore.Signal(str)

    def __init__(
        self,
        provider: DockerDataProvider,
        settings: SettingsRegistry,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._provider = provider
        self._settings = settings
        self._containers: Dict[str, ContainerInfo] = {}
        self._selected: ContainerInfo | None = None
        self._tasks: List[DockerTask] = []
        self._list_loading = False
        self._logs_loading = False
        self._action_running = False
        self._dot_icons: Dict[str, QtGui.QIcon] = {}

        self._setup_ui()

        self._list_timer = QtCore.QTimer(self)
        self._list_timer.timeout.connect(self.refresh)
        self._logs_timer = QtCore.QTimer(self)
        self._logs_timer.timeout.connect(self._load_logs)
        self.apply_refresh_intervals()

    # ------------------------------------------------------------------ setup
    def _setup_ui(self) -> None:
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        splitter = QtWidgets.QSplitter(QtCore.Qt.Orientation.Horizontal)
        layout.addWidget(splitter)

        splitter.addWidget(self._create_sidebar())
        self._details_stack = QtWidgets.QStackedWidget()
        self._details_stack.addWidget(self._create_placeholder())
        self._details_stack.addWidget(self._create_details())
        splitter.addWidget(self._details_stack)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([360, 900])

    def _create_sidebar(self) -> QtWidgets.QWidget:
        sidebar = QtWidgets.QFrame()
        sidebar.setObjectName("sidebar")
        layout = QtWidgets.QVBoxLayout(sidebar)

        title = QtWidgets.QLabel(translate("containers.title"))
        title.setObjectName("sectionTitle")
        layout.addWidget(title)

        self._summary = SummaryCards(
            total_color=self._theme_color("accent"),
            running_color=self._theme_color("success"),
            stopped_color=self._theme_color("danger"),
        )
        layout.addWidget(self._summary)

        self._table = ResourceTable(
            columns=[
                ColumnDefinition(translate("containers.column.name"), "name"),
                ColumnDefinition(translate("containers.column.image"), "image"),
                ColumnDefinition(translate("containers.column.ports"), "ports", format_ports_cell),
            ],
            toggle_label=translate("containers.only_running"),
            toggle_filter=lambda row: row.get("state") == RUNNING_STATE,
            row_post_processor=self._decorate_row,
        )
        self._table.set_toggle_checked(
            bool(self._settings.get_value("ui_state", "only_running", default=False))
        )
        toggled = self._table.toggle_changed()
        if toggled is not None:
            toggled.connect(self._on_only_running_toggled)
        self._table.row_selected.connect(self._on_row_selected)
        self._table.selection_cleared.connect(self._clear_selection)
        layout.addWidget(self._table, stretch=1)
        return sidebar

    def _create_placeholder(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(widget)
        layout.addStretch()
        title = QtWidgets.QLabel(translate("containers.placeholder.title"))
        title.setObjectName("sectionTitle")
        title.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)
        hint = QtWidgets.QLabel(translate("containers.placeholder.hint"))
        hint.setObjectName("mutedLabel")
        hint.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(hint)
        layout.addStretch()
        return widget

    def _create_details(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(widget)

        header = QtWidgets.QFrame()
        header.setObjectName("detailsPanel")
        header_layout = QtWidgets.QHBoxLayout(header)

        info_layout = QtWidgets.QFormLayout()
        self._name_label = QtWidgets.QLabel()
        self._name_label.setObjectName("sectionTitle")
        info_layout.addRow(self._name_label)
        self._image_label = QtWidgets.QLabel()
        self._status_label = QtWidgets.QLabel()
        self._ports_label = QtWidgets.QLabel()
        self._uptime_label = QtWidgets.QLabel()
        for key, label in (
            ("containers.details.image", self._image_label),
            ("containers.details.status", self._status_label),
            ("containers.details.ports", self._ports_label),
            ("containers.details.uptime", self._uptime_label),
        ):
            label.setTextInteractionFlags(QtCore.Qt.TextInteractionFlag.TextSelectableByMouse)
            caption = QtWidgets.QLabel(translate(key))
            caption.setObjectName("mutedLabel")
            info_layout.addRow(caption, label)
        header_layout.addLayout(info_layout, stretch=1)

        buttons = QtWidgets.QVBoxLayout()
        self._start_button = QtWidgets.QPushButton(translate("actions.start"))
        self._start_button.setObjectName("startButton")
        self._start_button.clicked.connect(lambda: self._run_action("start"))
        self._stop_button = QtWidgets.QPushButton(translate("actions.stop"))
        self._stop_button.setObjectName("stopButton")
        self._stop_button.clicked.connect(lambda: self._run_action("stop"))
        self._restart_button = QtWidgets.QPushButton(translate("actions.restart"))
        self._restart_button.setObjectName("restartButton")
        self._restart_button.clicked.connect(lambda: self._run_action("restart"))
        self._details_button = QtWidgets.QPushButton(translate("actions.details"))
        self._details_button.clicked.connect(self._open_details_dialog)
        for button in (
            self._start_button,
            self._stop_button,
            self._restart_button,
            self._details_button,
        ):
            buttons.addWidget(button)
        buttons.addStretch()
        header_layout.addLayout(buttons)
        layout.addWidget(header)

        logs_header = QtWidgets.QHBoxLayout()
        logs_title = QtWidgets.QLabel(translate("containers.logs.title"))
        logs_title.setObjectName("sectionTitle")
        logs_header.addWidget(logs_title)
        logs_header.addStretch()
        self._logs_loading_label = QtWidgets.QLabel(translate("common.loading"))
        self._logs_loading_label.setObjectName("mutedLabel")
        self._logs_loading_label.setVisible(False)
        logs_header.addWidget(self._logs_loading_label)
        layout.addLayout(logs_header)

        self._logs_view = QtWidgets.QPlainTextEdit()
        self._logs_view.setReadOnly(True)
        self._logs_view.setLineWrapMode(QtWidgets.QPlainTextEdit.LineWrapMode.WidgetWidth)
        font = QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.SystemFont.FixedFont)
        self._logs_view.setFont(font)
        layout.addWidget(self._logs_view, stretch=1)
        return widget

    # ---------------------------------------------------------------- helpers
    def _theme_color(self, key: str) -> str:
        return str(self._settings.get_value("theme", key, default="#ffffff"))

    def _status_icon(self, state: str) -> QtGui.QIcon:
        level = container_ops.status_level(state)
        icon = self._dot_icons.get(level)
        if icon is None:
            pixmap = QtGui.QPixmap(STATUS_DOT_SIZE, STATUS_DOT_SIZE)
            pixmap.fill(QtCore.Qt.GlobalColor.transparent)
            painter = QtGui.QPainter(pixmap)
            painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
            painter.setPen(QtCore.Qt.PenStyle.NoPen)
            painter.setBrush(QtGui.QColor(self._theme_color(level)))
            painter.drawEllipse(0, 0, STATUS_DOT_SIZE, STATUS_DOT_SIZE)
            painter.end()
            icon = QtGui.QIcon(pixmap)
            self._dot_icons[level] = icon
        return icon

    def _decorate_row(self, item: QtWidgets.QTreeWidgetItem, row: Dict[str, Any]) -> None:
        item.setIcon(0, self._status_icon(str(row.get("state", ""))))
        item.setToolTip(0, f"{row.get('name')} ({row.get('status')})")

    def _track(self, task: DockerTask) -> DockerTask:
        self._tasks.append(task)
        task.finished.connect(lambda: self._tasks.remove(task) if task in self._tasks else None)
        return task

    # -------------------------------------------------------------- lifecycle
    def apply_refresh_intervals(self) -> None:
        """Перечитывает интервалы таймеров из настроек."""

        self._list_timer.setInterval(
            int(self._settings.get_value("refresh", "containers_ms", default=5000))
        )
        self._logs_timer.setInterval(
            int(self._settings.get_value("refresh", "logs_ms", default=3000))
        )

    def start(self) -> None:
        """Загружает список и включает автообновление."""

        self.refresh()
        self._list_timer.start()

    def shutdown(self) -> None:
        """Останавливает таймеры и дожидается фоновых задач."""

        self._list_timer.stop()
        self._logs_timer.stop()
        for task in list(self._tasks):
            task.requestInterruption()
            task.wait()

    # ------------------------------------------------------------------ list
    def refresh(self) -> None:
        if self._list_loading:
            return
        self._list_loading = True
        self._track(
            start_task(
                self,
                self._provider.fetch_containers,
                on_ready=self._on_containers_loaded,
                on_error=self._on_containers_error,
                on_finished=self._on_list_finished,
                name="containers-list",
            )
        )

    def _on_list_finished(self) -> None:
        self._list_loading = False

    def _on_containers_loaded(self, rows: List[ContainerInfo]) -> None:
        self._containers = {row.id: row for row in rows}
        self._summary.update_summary(container_ops.summarize(rows))
        self._table.set_rows(row.to_dict() for row in rows)
        if self._selected is not None:
            updated = self._containers.get(self._selected.id)
            if updated is not None:
                self._show_container(updated)

    def _on_containers_error(self, message: str) -> None:
        self._table.show_placeholder(translate("containers.load_error"))
        self.status_message.emit(f"{translate('containers.load_error')}: {message}")

    def _on_only_running_toggled(self, checked: bool) -> None:
        self._settings.set_value("ui_state", "only_running", bool(checked))

    # -------------------------------------------------------------- selection
    def _on_row_selected(self, row: Dict[str, Any]) -> None:
        container = self._containers.get(str(row.get("id")))
        if container is None:
            return
        previous = self._selected
        self._show_container(container)
        if previous is None or previous.id != container.id:
            self._logs_view.clear()
            self._load_logs()

    def _clear_selection(self) -> None:
        self._selected = None
        self._logs_timer.stop()
        self._details_stack.setCurrentIndex(0)

    def _show_container(self, container: ContainerInfo) -> None:
        was_running = self._selected is not None and self._selected.is_running
        same_container = self._selected is not None and self._selected.id == container.id
        self._selected = container
        self._details_stack.setCurrentIndex(1)
        self._name_label.setText(container.name)
        self._image_label.setText(container.image)
        color = self._theme_color("success" if container.is_running else "danger")
        self._status_label.setText(container.status)
        self._status_label.setStyleSheet(f"color: {color};")
        self._ports_label.setText(format_ports_cell(container.ports))
        self._uptime_label.setText(container.uptime or "-")
        self._update_buttons()

        if container.is_running:
            if not self._logs_timer.isActive():
                self._logs_timer.start()
        else:
            self._logs_timer.stop()
            if same_container and was_running:
                self._load_logs()

    def _update_buttons(self) -> None:
        running = self._selected is not None and self._selected.is_running
        idle = self._selected is not None and not self._action_running
        self._start_button.setEnabled(idle and not running)
        self._stop_button.setEnabled(idle and running)
        self._restart_button.setEnabled(idle and running)
        self._details_button.setEnabled(self._selected is not None)

    # ------------------------------------------------------------------- logs
    def _load_logs(self) -> None:
        if self._selected is None or self._logs_loading:
            return
        self._logs_loading = True
        self._logs_loading_label.setVisible(True)
        container_id = self._selected.id
        self._track(
            start_task(
                self,
                self._provider.fetch_container_logs,
                container_id,
                on_ready=lambda text: self._on_logs_loaded(container_id, text),
                on_finished=self._on_logs_finished,
                name="container-logs",
            )
        )

    def _on_logs_finished(self) -> None:
        self._logs_loading = False
        self._logs_loading_label.setVisible(False)

    def _on_logs_loaded(self, container_id: str, text: str) -> None:
        if self._selected is None or self._selected.id != container_id:
            return
        if text == LOGS_UNAVAILABLE:
            text = translate("containers.logs.error")
        scrollbar = self._logs_view.verticalScrollBar()
        at_bottom = scrollbar.value() >= scrollbar.maximum()
        self._logs_view.setPlainText(text or translate("containers.logs.empty"))
        if at_bottom:
            scrollbar.setValue(scrollbar.maximum())

    # ---------------------------------------------------------------- actions
    def _run_action(self, action: str) -> None:
        if self._selected is None or self._action_running:
            return
        handlers = {
            "start": self._provider.start_container,
            "stop": self._provider.stop_container,
            "restart": self._provider.restart_container,
        }
        container = self._selected
        self._action_running = True
        self._update_buttons()
        self.status_message.emit(
            translate(f"containers.action.{action}.progress").format(name=container.name)
        )
        self._track(
            start_task(
                self,
                handlers[action],
                container.id,
                on_ready=lambda ok: self._on_action_done(action, container, bool(ok)),
                on_error=lambda _message: self._on_action_done(action, container, False),
                on_finished=self._on_action_finished,
                name=f"container-{action}",
            )
        )

    def _on_action_done(self, action: str, container: ContainerInfo, ok: bool) -> None:
        key = "done" if ok else "failed"
        self.status_message.emit(
            translate(f"containers.action.{action}.{key}").format(name=container.name)
        )
        self.refresh()

    def _on_action_finished(self) -> None:
        # Кнопки разблокируются при любом исходе задачи
        self._action_running = False
        self._update_buttons()

    def _open_details_dialog(self) -> None:
        if self._selected is None:
            return
        container = self._selected
        provider = self._provider

        def load_details() -> tuple[str, Dict[str, Any]]:
            return (
                provider.fetch_container_logs(container.id),
                provider.inspect_container(container.id),
            )

        self._details_button.setEnabled(False)
        self._track(
            start_task(
                self,
                load_details,
                on_ready=lambda result: self._show_details_dialog(container, *result),
                on_finished=self._update_buttons,
                name="container-details",
            )
        )

    def _show_details_dialog(
        self, container: ContainerInfo, logs: str, inspect_data: Dict[str, Any]
    ) -> None:
        if logs == LOGS_UNAVAILABLE:
            logs = ""
        dialog = ContainerDetailsDialog(
            container=container, logs=logs, inspect_data=inspect_data, parent=self
        )
        dialog.exec()
