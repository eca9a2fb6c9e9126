"""Экран дерева зависимостей: легенда, холст и панель выбранного узла."""

from __future__ import annotations

import html
from typing import List, Union

from PySide6 import QtCore, QtWidgets

from dockdeck.docker_api.data_provider import DockerDataProvider
from dockdeck.docker_api.models import RUNNING_STATE, ContainerNode, DependencyTree, NetworkNode
from dockdeck.graph.details import LIST_ROW_KEYS, node_details, node_title_key
from dockdeck.i18n.translator import translate
from dockdeck.settings.registry import SettingsRegistry
from dockdeck.ui.widgets.dependency_canvas import DependencyCanvas
from dockdeck.ui.workers import DockerTask, start_task

PAGE_LOADING = 0
PAGE_CANVAS = 1


class DependencyView(QtWidgets.QWidget):
    """Граф контейнеров и сетей с автообновлением по `refresh.dependencies_ms`."""

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
        self._tasks: List[DockerTask] = []
        self._loading = False
        self._loaded_once = False
        self._selected_id: str | None = None
        self._setup_ui()

        self._timer = QtCore.QTimer(self)
        self._timer.timeout.connect(self.refresh)
        self.apply_refresh_intervals()

    def _setup_ui(self) -> None:
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        main = QtWidgets.QWidget()
        main_layout = QtWidgets.QVBoxLayout(main)
        title = QtWidgets.QLabel(translate("dependencies.title"))
        title.setObjectName("sectionTitle")
        main_layout.addWidget(title)
        main_layout.addLayout(self._create_legend())

        self._stack = QtWidgets.QStackedWidget()
        self._loading_label = QtWidgets.QLabel(translate("dependencies.loading"))
        self._loading_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        self._loading_label.setStyleSheet(f"color: {self._theme_color('accent')}; font-size: 16px;")
        self._stack.addWidget(self._loading_label)

        self._canvas = DependencyCanvas()
        self._canvas.set_label_color(self._label_color())
        self._canvas.node_selected.connect(self._show_node)
        scroll = QtWidgets.QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._canvas)
        self._stack.addWidget(scroll)
        main_layout.addWidget(self._stack, stretch=1)
        layout.addWidget(main, stretch=1)

        layout.addWidget(self._create_node_panel())

    def _create_legend(self) -> QtWidgets.QHBoxLayout:
        legend = QtWidgets.QHBoxLayout()
        for color_key, text_key in (
            ("accent", "dependencies.legend.networks"),
            ("success", "dependencies.legend.running"),
            ("danger", "dependencies.legend.stopped"),
        ):
            dot = QtWidgets.QLabel("●")
            dot.setStyleSheet(f"color: {self._theme_color(color_key)};")
            legend.addWidget(dot)
            label = QtWidgets.QLabel(translate(text_key))
            label.setObjectName("mutedLabel")
            legend.addWidget(label)
            legend.addSpacing(12)
        legend.addStretch()
        return legend

    def _create_node_panel(self) -> QtWidgets.QWidget:
        self._node_panel = QtWidgets.QFrame()
        self._node_panel.setObjectName("nodePanel")
        self._node_panel.setFixedWidth(300)
        panel_layout = QtWidgets.QVBoxLayout(self._node_panel)

        self._node_title = QtWidgets.QLabel()
        self._node_title.setObjectName("sectionTitle")
        panel_layout.addWidget(self._node_title)

        self._node_body = QtWidgets.QLabel()
        self._node_body.setWordWrap(True)
        self._node_body.setTextFormat(QtCore.Qt.TextFormat.RichText)
        self._node_body.setAlignment(QtCore.Qt.AlignmentFlag.AlignTop)
        self._node_body.setTextInteractionFlags(QtCore.Qt.TextInteractionFlag.TextSelectableByMouse)
        scroll = QtWidgets.QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QtWidgets.QFrame.Shape.NoFrame)
        scroll.setWidget(self._node_body)
        panel_layout.addWidget(scroll, stretch=1)

        close_button = QtWidgets.QPushButton(translate("actions.close"))
        close_button.clicked.connect(self.close_node_panel)
        panel_layout.addWidget(close_button)
        self._node_panel.setVisible(False)
        return self._node_panel

    # ---------------------------------------------------------------- helpers
    def _theme_color(self, key: str) -> str:
        return str(self._settings.get_value("theme", key, default="#ffffff"))

    def _label_color(self) -> str:
        variant = self._settings.get_value("app", "theme", default="dark")
        suffix = "dark" if variant == "dark" else "light"
        return self._theme_color(f"text_{suffix}")

    def refresh_palette(self) -> None:
        self._canvas.set_label_color(self._label_color())

    # -------------------------------------------------------------- lifecycle
    def apply_refresh_intervals(self) -> None:
        self._timer.setInterval(
            int(self._settings.get_value("refresh", "dependencies_ms", default=10000))
        )

    def start(self) -> None:
        self.refresh()
        self._timer.start()

    def shutdown(self) -> None:
        self._timer.stop()
        for task in list(self._tasks):
            task.requestInterruption()
            task.wait()

    def refresh(self) -> None:
        if self._loading:
            return
        self._loading = True
        if not self._loaded_once:
            self._loading_label.setText(translate("dependencies.loading"))
            self._stack.setCurrentIndex(PAGE_LOADING)
        task = start_task(
            self,
            self._provider.fetch_dependency_tree,
            on_ready=self._on_tree_loaded,
            on_error=self._on_tree_error,
            on_finished=self._on_finished,
            name="dependency-tree",
        )
        self._tasks.append(task)
        task.finished.connect(lambda: self._tasks.remove(task) if task in self._tasks else None)

    def _on_finished(self) -> None:
        self._loading = False

    def _on_tree_loaded(self, tree: DependencyTree) -> None:
        self._loaded_once = True
        self._canvas.set_tree(tree)
        self._stack.setCurrentIndex(PAGE_CANVAS)
        if self._selected_id is not None:
            node = self._canvas.node(self._selected_id)
            if node is None:
                self.close_node_panel()
            else:
                self._show_node(node)

    def _on_tree_error(self, message: str) -> None:
        self.status_message.emit(f"{translate('dependencies.load_error')}: {message}")
        if not self._loaded_once:
            self._loading_label.setText(translate("dependencies.load_error"))

    # -------------------------------------------------------------- node panel
    def _show_node(self, node: Union[ContainerNode, NetworkNode]) -> None:
        self._selected_id = node.id
        self._node_title.setText(translate(node_title_key(node)))
        parts = []
        for key, values in node_details(node):
            style = ""
            if key == "dependencies.node.state":
                color_key = "success" if values[0] == RUNNING_STATE else "danger"
                style = f' style="color: {self._theme_color(color_key)};"'
            escaped = [html.escape(value) for value in values]
            if key in LIST_ROW_KEYS:
                escaped = [f"&bull; {value}" for value in escaped]
            lines = "<br>".join(escaped)
            parts.append(
                f'<p><span style="color: {self._theme_color("muted")};">{translate(key)}</span><br>'
                f"<span{style}>{lines}</span></p>"
            )
        self._node_body.setText("".join(parts))
        self._node_panel.setVisible(True)

    def close_node_panel(self) -> None:
        self._selected_id = None
        self._node_panel.setVisible(False)
