"""Диалог с подробностями о контейнере: обзор, логи, inspect и монтирования."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterable, List, Tuple

from PySide6 import QtCore, QtGui, QtWidgets

from dockdeck.docker_api.models import ContainerInfo
from dockdeck.i18n.translator import translate

# Метка времени Docker (`--timestamps`) в начале строки лога
LOG_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?Z?\s+")


def overview_rows(container: ContainerInfo, inspect_data: Dict[str, Any]) -> List[Tuple[str, str]]:
    """Пары (ключ перевода, значение) для вкладки обзора."""

    state = inspect_data.get("State") or {}
    network_settings = inspect_data.get("NetworkSettings") or {}
    networks = ", ".join((network_settings.get("Networks") or {}).keys())
    return [
        ("containers.details.id", container.id),
        ("containers.details.image", container.image),
        ("containers.details.status", container.status),
        ("containers.details.ports", ", ".join(container.ports) or "-"),
        ("containers.details.created", str(inspect_data.get("Created") or "-")),
        ("containers.details.started", str(state.get("StartedAt") or "-")),
        ("containers.details.restarts", str(inspect_data.get("RestartCount", 0))),
        ("containers.details.networks", networks or "-"),
    ]


class ContainerDetailsDialog(QtWidgets.QDialog):
    """Вкладки с обзором, логами, inspect и bind mounts выбранного контейнера."""

    def __init__(
        self,
        *,
        container: ContainerInfo,
        logs: str,
        inspect_data: Dict[str, Any],
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(translate("containers.dialog.title").format(name=container.name))
        self.resize(950, 620)

        self._container = container
        self._raw_logs = logs.splitlines() if logs else []
        self._inspect_data = inspect_data or {}
        self._settings = QtCore.QSettings("docker-deck", "ContainerDetailsDialog")

        layout = QtWidgets.QVBoxLayout(self)
        self._tabs = QtWidgets.QTabWidget()
        layout.addWidget(self._tabs)

        self._tabs.addTab(self._create_overview_tab(), translate("containers.dialog.overview"))
        self._tabs.addTab(self._create_logs_tab(), translate("containers.dialog.logs"))
        self._tabs.addTab(self._create_inspect_tab(), translate("containers.dialog.inspect"))
        self._tabs.addTab(self._create_mounts_tab(), translate("containers.dialog.mounts"))

        self._restore_state()

        buttons = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(self.reject)
        buttons.button(QtWidgets.QDialogButtonBox.StandardButton.Close).setText(
            translate("actions.close")
        )
        layout.addWidget(buttons)

    # ------------------------------------------------------------ overview tab
    def _create_overview_tab(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        form = QtWidgets.QFormLayout(widget)
        for key, value in overview_rows(self._container, self._inspect_data):
            label = QtWidgets.QLabel(value)
            label.setTextInteractionFlags(QtCore.Qt.TextInteractionFlag.TextSelectableByMouse)
            caption = QtWidgets.QLabel(translate(key))
            caption.setObjectName("mutedLabel")
            form.addRow(caption, label)
        return widget

    # ---------------------------------------------------------------- logs tab
    def _create_logs_tab(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(widget)

        controls = QtWidgets.QHBoxLayout()
        self._log_search = QtWidgets.QLineEdit()
        self._log_search.setPlaceholderText(translate("containers.logs.search"))
        self._log_search.textChanged.connect(self._refresh_logs_view)
        controls.addWidget(self._log_search, stretch=2)

        self._hide_timestamp = QtWidgets.QCheckBox(translate("containers.logs.hide_timestamp"))
        self._hide_timestamp.stateChanged.connect(self._refresh_logs_view)
        controls.addWidget(self._hide_timestamp)

        copy_button = QtWidgets.QPushButton(translate("containers.logs.copy"))
        copy_button.clicked.connect(self._copy_logs_to_clipboard)
        controls.addWidget(copy_button)
        controls.addStretch()
        layout.addLayout(controls)

        self._logs_view = QtWidgets.QPlainTextEdit()
        self._logs_view.setReadOnly(True)
        self._logs_view.setFont(QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.SystemFont.FixedFont))
        layout.addWidget(self._logs_view)
        self._refresh_logs_view()
        return widget

    def _refresh_logs_view(self) -> None:
        if not self._raw_logs:
            self._logs_view.setPlainText(translate("containers.logs.empty"))
            return
        search = self._log_search.text().lower()
        lines: Iterable[str] = self._raw_logs
        if search:
            lines = [line for line in self._raw_logs if search in line.lower()]
        if self._hide_timestamp.isChecked():
            lines = [LOG_TIMESTAMP_RE.sub("", line) for line in lines]
        text = "\n".join(lines)
        self._logs_view.setPlainText(text or translate("containers.logs.empty"))

    def _copy_logs_to_clipboard(self) -> None:
        QtWidgets.QApplication.clipboard().setText(self._logs_view.toPlainText())

    # -------------------------------------------------------------- inspect tab
    def _create_inspect_tab(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(widget)

        self._inspect_raw_checkbox = QtWidgets.QCheckBox(translate("containers.inspect.raw"))
        self._inspect_raw_checkbox.stateChanged.connect(self._toggle_inspect_view)
        layout.addWidget(self._inspect_raw_checkbox)

        self._inspect_stack = QtWidgets.QStackedWidget()
        layout.addWidget(self._inspect_stack)

        self._inspect_tree = QtWidgets.QTreeWidget()
        self._inspect_tree.setColumnCount(2)
        self._inspect_tree.setHeaderLabels(
            [translate("containers.inspect.key"), translate("containers.inspect.value")]
        )
        self._populate_tree(self._inspect_tree.invisibleRootItem(), self._inspect_data)
        header = self._inspect_tree.header()
        header.setSectionResizeMode(0, QtWidgets.QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(1, QtWidgets.QHeaderView.ResizeMode.Stretch)
        self._inspect_stack.addWidget(self._inspect_tree)

        self._inspect_text = QtWidgets.QPlainTextEdit()
        self._inspect_text.setReadOnly(True)
        self._inspect_text.setPlainText(json.dumps(self._inspect_data, indent=2, ensure_ascii=False))
        self._inspect_stack.addWidget(self._inspect_text)
        return widget

    def _populate_tree(self, parent: QtWidgets.QTreeWidgetItem, value: Any) -> None:
        if isinstance(value, dict):
            children: Iterable[Tuple[str, Any]] = ((str(key), item) for key, item in value.items())
        else:
            children = ((f"[{index}]", item) for index, item in enumerate(value))
        for key, child in children:
            if isinstance(child, (dict, list)) and child:
                item = QtWidgets.QTreeWidgetItem(parent, [key, ""])
                self._populate_tree(item, child)
            else:
                text = json.dumps(child, ensure_ascii=False) if isinstance(child, (dict, list)) else str(child)
                QtWidgets.QTreeWidgetItem(parent, [key, text])

    def _toggle_inspect_view(self) -> None:
        is_raw = self._inspect_raw_checkbox.isChecked()
        self._inspect_stack.setCurrentWidget(self._inspect_text if is_raw else self._inspect_tree)

    # -------------------------------------------------------------- mounts tab
    def _create_mounts_tab(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(widget)

        mounts = self._inspect_data.get("Mounts") or []
        if not isinstance(mounts, list) or not mounts:
            layout.addWidget(QtWidgets.QLabel(translate("containers.mounts.empty")))
            return widget

        table = QtWidgets.QTableWidget(len(mounts), 4)
        table.setHorizontalHeaderLabels(
            [
                translate("containers.mounts.source"),
                translate("containers.mounts.destination"),
                translate("containers.mounts.type"),
                translate("containers.mounts.mode"),
            ]
        )
        for row_index, mount in enumerate(mounts):
            values = (
                mount.get("Source") or mount.get("Name") or "-",
                mount.get("Destination") or "-",
                mount.get("Type") or "-",
                "rw" if mount.get("RW", True) else "ro",
            )
            for column, value in enumerate(values):
                table.setItem(row_index, column, QtWidgets.QTableWidgetItem(str(value)))
        table.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.ResizeMode.Stretch)
        layout.addWidget(table)
        return widget

    # ------------------------------------------------------------------ state
    def done(self, result: int) -> None:
        self._save_state()
        super().done(result)

    def _save_state(self) -> None:
        self._settings.setValue("geometry", self.saveGeometry())
        self._settings.setValue("tab_index", self._tabs.currentIndex())
        self._settings.setValue("inspect_raw", self._inspect_raw_checkbox.isChecked())

    def _restore_state(self) -> None:
        geometry = self._settings.value("geometry")
        if geometry is not None:
            self.restoreGeometry(geometry)
        try:
            tab_index = int(self._settings.value("tab_index", 0))
        except (TypeError, ValueError):
            tab_index = 0
        if 0 <= tab_index < self._tabs.count():
            self._tabs.setCurrentIndex(tab_index)
        raw = self._settings.value("inspect_raw", False)
        self._inspect_raw_checkbox.setChecked(raw in (True, "true", "1"))
