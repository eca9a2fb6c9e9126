"""Список ресурсов с поиском, фильтром и сохранением выделения."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Sequence

from PySide6 import QtCore, QtWidgets

from dockdeck.i18n.translator import translate

RowData = Dict[str, Any]
ToggleFilter = Callable[[RowData], bool]


@dataclass(slots=True)
class ColumnDefinition:
    """Описание одной колонки таблицы."""

    header: str
    key: str
    formatter: Callable[[Any], str] | None = None

    def render(self, value: Any) -> str:
        """Возвращает строку для отображения."""

        if self.formatter:
            return self.formatter(value)
        if value is None:
            return "-"
        return str(value)


class ResourceTable(QtWidgets.QWidget):
    """Виджет с поиском, переключателем-фильтром и плоским списком строк.

    Строки идентифицируются по `id_key`; после `set_rows` выделение
    восстанавливается, если строка с тем же идентификатором осталась.
    """

    row_selected = QtCore.Signal(dict)
    selection_cleared = QtCore.Signal()

    def __init__(
        self,
        *,
        columns: Sequence[ColumnDefinition],
        id_key: str = "id",
        toggle_label: str | None = None,
        toggle_filter: ToggleFilter | None = None,
        row_post_processor: Callable[[QtWidgets.QTreeWidgetItem, RowData], None] | None = None,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._columns = list(columns)
        self._id_key = id_key
        self._toggle_filter = toggle_filter
        self._row_post_processor = row_post_processor
        self._rows: List[RowData] = []
        self._selected_id: str | None = None
        self._default_placeholder = translate("tables.no_data")
        self._placeholder_text = self._default_placeholder
        self._setup_ui(toggle_label)

    # ------------------------------------------------------------------ setup
    def _setup_ui(self, toggle_label: str | None) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        controls = QtWidgets.QHBoxLayout()
        self._search = QtWidgets.QLineEdit()
        self._search.setPlaceholderText(translate("tables.search_placeholder"))
        self._search.setClearButtonEnabled(True)
        self._search.textChanged.connect(self._refresh_view)
        controls.addWidget(self._search)

        self._toggle_checkbox: QtWidgets.QCheckBox | None = None
        if toggle_label:
            self._toggle_checkbox = QtWidgets.QCheckBox(toggle_label)
            self._toggle_checkbox.stateChanged.connect(self._refresh_view)
            controls.addWidget(self._toggle_checkbox)
        layout.addLayout(controls)

        self._tree = QtWidgets.QTreeWidget()
        self._tree.setHeaderLabels([column.header for column in self._columns])
        header = self._tree.header()
        header.setStretchLastSection(True)
        header.setSectionResizeMode(QtWidgets.QHeaderView.ResizeMode.Interactive)
        self._tree.setRootIsDecorated(False)
        self._tree.setUniformRowHeights(True)
        self._tree.setAlternatingRowColors(True)
        self._tree.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)
        self._tree.itemSelectionChanged.connect(self._on_selection_changed)
        layout.addWidget(self._tree)

    @property
    def tree(self) -> QtWidgets.QTreeWidget:
        """Доступ к внутреннему дереву."""

        return self._tree

    @property
    def toggle_checked(self) -> bool:
        return bool(self._toggle_checkbox and self._toggle_checkbox.isChecked())

    def set_toggle_checked(self, checked: bool) -> None:
        if self._toggle_checkbox is not None:
            self._toggle_checkbox.setChecked(checked)

    def toggle_changed(self) -> QtCore.SignalInstance | None:
        """Сигнал изменения переключателя (None, если его нет)."""

        if self._toggle_checkbox is None:
            return None
        return self._toggle_checkbox.toggled

    # ----------------------------------------------------------------- data api
    def set_rows(self, rows: Iterable[RowData]) -> None:
        """Сохраняет и отображает список строк, не теряя выделения."""

        self._placeholder_text = self._default_placeholder
        self._rows = list(rows)
        self._refresh_view()

    def show_placeholder(self, message: str) -> None:
        """Отображает сообщение вместо данных."""

        self._rows = []
        self._placeholder_text = message or self._default_placeholder
        self._refresh_view()

    def rows(self) -> List[RowData]:
        return list(self._rows)

    def current_row(self) -> RowData | None:
        """Возвращает данные выбранной строки."""

        item = self._tree.currentItem()
        if item is None:
            return None
        data = item.data(0, QtCore.Qt.ItemDataRole.UserRole)
        if isinstance(data, dict):
            return data
        return None

    # --------------------------------------------------------------- rendering
    def _refresh_view(self) -> None:
        self._tree.blockSignals(True)
        self._tree.clear()
        rows = self._apply_filters()
        if not rows:
            placeholder = QtWidgets.QTreeWidgetItem(
                [self._placeholder_text] + [""] * (len(self._columns) - 1)
            )
            placeholder.setFlags(QtCore.Qt.ItemFlag.ItemIsEnabled)
            font = placeholder.font(0)
            font.setItalic(True)
            placeholder.setFont(0, font)
            self._tree.addTopLevelItem(placeholder)
        else:
            for row in rows:
                item = self._create_item(row)
                if self._selected_id is not None and str(row.get(self._id_key)) == self._selected_id:
                    self._tree.setCurrentItem(item)
        self._tree.blockSignals(False)
        if self._selected_id is not None and self.current_row() is None:
            self._selected_id = None
            self.selection_cleared.emit()

    def _create_item(self, row: RowData) -> QtWidgets.QTreeWidgetItem:
        values = [column.render(row.get(column.key)) for column in self._columns]
        item = QtWidgets.QTreeWidgetItem(self._tree, values)
        item.setData(0, QtCore.Qt.ItemDataRole.UserRole, row)
        for index, value in enumerate(values):
            item.setToolTip(index, value)
        if self._row_post_processor:
            self._row_post_processor(item, row)
        return item

    def _on_selection_changed(self) -> None:
        row = self.current_row()
        if row is None:
            return
        self._selected_id = str(row.get(self._id_key))
        self.row_selected.emit(row)

    # -------------------------------------------------------------- filtering
    def _apply_filters(self) -> List[RowData]:
        rows = list(self._rows)
        if self._toggle_filter and self.toggle_checked:
            rows = [row for row in rows if self._toggle_filter(row)]

        query = self._search.text().strip().lower()
        if not query:
            return rows
        return [row for row in rows if self._row_matches(row, query)]

    def _row_matches(self, row: RowData, query: str) -> bool:
        for column in self._columns:
            value = row.get(column.key)
            if value is not None and query in column.render(value).lower():
                return True
        return False
