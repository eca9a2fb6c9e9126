"""Главное окно Docker Deck: вкладки контейнеров и зависимостей, меню и футер."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

from PySide6 import QtCore, QtGui, QtWidgets

from dockdeck.docker_api.data_provider import DockerDataProvider
from dockdeck.i18n.translator import translate
from dockdeck.settings.groups import SUPPORTED_LANGUAGES
from dockdeck.settings.registry import SettingsRegistry
from dockdeck.ui.styles.theme_manager import apply_theme
from dockdeck.ui.views.containers_view import ContainersView
from dockdeck.ui.views.dependency_view import DependencyView
from dockdeck.ui.widgets.footer import FooterWidget
from dockdeck.ui.workers import DockerTask, start_task
from dockdeck.utils.system_metrics import HostMetrics, read_host_metrics

TAB_CONTAINERS = 0
TAB_DEPENDENCIES = 1
ENGINE_CHECK_INTERVAL_MS = 15000
STATUS_TIMEOUT_MS = 8000
MIN_WINDOW_WIDTH = 640
MIN_WINDOW_HEIGHT = 480


class MainWindow(QtWidgets.QMainWindow):
    """Главное окно с двумя вкладками и нижней панелью статусов.

    Окно подписано на изменения настроек: интервалы обновления и тема
    применяются сразу, смена языка вступает в силу после перезапуска.
    """

    def __init__(
        self,
        *,
        settings: SettingsRegistry,
        docker_data_provider: DockerDataProvider,
        workspace_dir: Path,
    ) -> None:
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self._settings = settings
        self._provider = docker_data_provider
        self._workspace_dir = workspace_dir
        self._menu_actions: Dict[str, QtGui.QAction] = {}
        self._engine_tasks: List[DockerTask] = []

        self._containers_view = ContainersView(docker_data_provider, settings)
        self._dependency_view = DependencyView(docker_data_provider, settings)
        self._footer = FooterWidget()
        self._tabs = QtWidgets.QTabWidget()

        self._system_metrics_timer = QtCore.QTimer(self)
        self._system_metrics_timer.timeout.connect(self._update_system_metrics)
        self._engine_timer = QtCore.QTimer(self)
        self._engine_timer.setInterval(ENGINE_CHECK_INTERVAL_MS)
        self._engine_timer.timeout.connect(self._check_engine)

        self._setup_window()
        self._apply_initial_window_state()
        self._create_menu_bar()
        self._create_status_bar()
        self._restore_ui_state()
        self._settings.register_observer(self)

        self._containers_view.start()
        self._dependency_view.start()
        self._check_engine()
        self._engine_timer.start()
        self._start_system_metrics_timer()

    # ------------------------------------------------------------------- setup
    def _setup_window(self) -> None:
        self.setWindowTitle(translate("app.title"))

        central = QtWidgets.QWidget()
        root_layout = QtWidgets.QVBoxLayout(central)
        title = QtWidgets.QLabel(translate("app.title"))
        title.setObjectName("appTitle")
        root_layout.addWidget(title)

        self._tabs.addTab(self._containers_view, translate("tabs.containers"))
        self._tabs.addTab(self._dependency_view, translate("tabs.dependencies"))
        self._tabs.currentChanged.connect(self._on_tab_changed)
        root_layout.addWidget(self._tabs, stretch=1)
        root_layout.addWidget(self._footer)
        self.setCentralWidget(central)

        self._containers_view.status_message.connect(self._show_status)
        self._dependency_view.status_message.connect(self._show_status)

    def _apply_initial_window_state(self) -> None:
        width = int(self._settings.get_value("app", "window_width", default=1280))
        height = int(self._settings.get_value("app", "window_height", default=800))
        self.resize(width, height)
        if self._settings.get_value("app", "window_maximized", default=False):
            self.setWindowState(QtCore.Qt.WindowState.WindowMaximized)

    def _create_menu_bar(self) -> None:
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu(translate("menu.file"))
        refresh_action = file_menu.addAction(translate("actions.refresh"))
        refresh_action.setShortcut(QtGui.QKeySequence.StandardKey.Refresh)
        refresh_action.triggered.connect(self._refresh_current_tab)
        self._menu_actions["refresh"] = refresh_action

        logs_action = file_menu.addAction(translate("actions.open_logs"))
        logs_action.triggered.connect(self._open_logs_folder)
        self._menu_actions["open_logs"] = logs_action

        file_menu.addSeparator()
        exit_action = file_menu.addAction(translate("actions.exit"))
        exit_action.setShortcut(QtGui.QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        self._menu_actions["exit"] = exit_action

        view_menu = menu_bar.addMenu(translate("menu.view"))
        theme_action = view_menu.addAction(translate("actions.toggle_theme"))
        theme_action.triggered.connect(self._toggle_theme)
        self._menu_actions["toggle_theme"] = theme_action

        metrics_action = view_menu.addAction(translate("actions.system_metrics"))
        metrics_action.setCheckable(True)
        metrics_action.setChecked(
            bool(self._settings.get_value("refresh", "system_metrics_enabled", default=True))
        )
        metrics_action.toggled.connect(
            lambda checked: self._settings.set_value("refresh", "system_metrics_enabled", checked)
        )
        self._menu_actions["system_metrics"] = metrics_action

        language_menu = view_menu.addMenu(translate("menu.language"))
        language_group = QtGui.QActionGroup(self)
        current_language = self._settings.get_value("app", "language", default="en")
        for language in SUPPORTED_LANGUAGES:
            action = language_menu.addAction(translate(f"languages.{language}"))
            action.setCheckable(True)
            action.setChecked(language == current_language)
            action.triggered.connect(lambda _=False, lang=language: self._change_language(lang))
            language_group.addAction(action)
            self._menu_actions[f"language_{language}"] = action

    def _create_status_bar(self) -> None:
        self.statusBar().showMessage(translate("status.ready"))

    def _restore_ui_state(self) -> None:
        index = int(self._settings.get_value("ui_state", "last_active_tab", default=TAB_CONTAINERS))
        if 0 <= index < self._tabs.count():
            self._tabs.setCurrentIndex(index)

    # ---------------------------------------------------------------- handlers
    def _on_tab_changed(self, index: int) -> None:
        self._settings.set_value("ui_state", "last_active_tab", index)

    def _refresh_current_tab(self) -> None:
        if self._tabs.currentIndex() == TAB_DEPENDENCIES:
            self._dependency_view.refresh()
        else:
            self._containers_view.refresh()
        self._check_engine()

    def _toggle_theme(self) -> None:
        current = self._settings.get_value("app", "theme", default="dark")
        self._settings.set_value("app", "theme", "light" if current == "dark" else "dark")

    def _change_language(self, language: str) -> None:
        self._settings.set_value("app", "language", language)

    def _open_logs_folder(self) -> None:
        logs_dir = self._workspace_dir / "logs"
        if not QtGui.QDesktopServices.openUrl(QtCore.QUrl.fromLocalFile(str(logs_dir))):
            self._logger.warning("Cannot open logs folder %s", logs_dir)
            self._show_status(translate("status.open_logs_failed"))

    def _show_status(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_TIMEOUT_MS)

    def on_setting_changed(
        self,
        group: str,
        key: str,
        old_value: object,
        new_value: object,
    ) -> None:
        """Применяет изменения настроек, которые не требуют перезапуска."""

        if group == "refresh":
            self._containers_view.apply_refresh_intervals()
            self._dependency_view.apply_refresh_intervals()
            if key.startswith("system_metrics"):
                self._start_system_metrics_timer()
        elif group in ("app", "theme") and key != "language":
            app = QtWidgets.QApplication.instance()
            if isinstance(app, QtWidgets.QApplication):
                apply_theme(app, self._settings)
            self._dependency_view.refresh_palette()
        elif group == "app" and key == "language":
            self._show_status(translate("status.restart_required"))

    # ------------------------------------------------------------------ footer
    def _check_engine(self) -> None:
        if self._engine_tasks:
            return
        task = start_task(
            self,
            self._provider.engine_version,
            on_ready=self._footer.update_engine_status,
            name="engine-version",
        )
        self._engine_tasks.append(task)
        task.finished.connect(lambda: self._engine_tasks.remove(task) if task in self._engine_tasks else None)

    def _start_system_metrics_timer(self) -> None:
        """Настраивает таймер системных метрик."""

        self._system_metrics_timer.stop()
        refresh_group = self._settings.get_group("refresh")
        enabled = bool(refresh_group.get("system_metrics_enabled"))
        self._footer.set_stats_visible(enabled)
        if not enabled:
            return
        self._system_metrics_timer.start(int(refresh_group.get("system_metrics_ms")))
        self._update_system_metrics()

    def _update_system_metrics(self) -> None:
        try:
            metrics = read_host_metrics()
        except OSError as exc:
            self._logger.warning("Cannot read host metrics: %s", exc)
            metrics = HostMetrics(ram="N/A", cpu="N/A")
        self._footer.update_stats(metrics)

    # --------------------------------------------------------------- shutdown
    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self._engine_timer.stop()
        self._system_metrics_timer.stop()
        self._containers_view.shutdown()
        self._dependency_view.shutdown()
        for task in list(self._engine_tasks):
            task.requestInterruption()
            task.wait()
        self._settings.unregister_observer(self)

        maximized = self.isMaximized()
        self._settings.set_value("app", "window_maximized", maximized)
        if not maximized:
            self._settings.set_value("app", "window_width", max(MIN_WINDOW_WIDTH, self.width()))
            self._settings.set_value("app", "window_height", max(MIN_WINDOW_HEIGHT, self.height()))
        self._settings.save_to_disk()
        self._logger.info("Main window closed, settings saved to %s", self._settings.config_path)
        super().closeEvent(event)


def create_main_window(
    *,
    settings: SettingsRegistry,
    docker_data_provider: DockerDataProvider,
    workspace_dir: Path,
) -> MainWindow:
    """Фабрика главного окна."""

    return MainWindow(
        settings=settings,
        docker_data_provider=docker_data_provider,
        workspace_dir=workspace_dir,
    )
