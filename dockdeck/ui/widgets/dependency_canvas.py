"""Холст графа зависимостей: рисует узлы и связи, посчитанные в graph.layout."""

from __future__ import annotations

from typing import Dict, Union

from PySide6 import QtCore, QtGui, QtWidgets

from dockdeck.docker_api.dependencies import resolve_edges
from dockdeck.docker_api.models import ContainerNode, DependencyTree, NetworkNode
from dockdeck.graph import layout as graph_layout

Node = Union[ContainerNode, NetworkNode]

NETWORK_ICON = "\U0001F310"
CONTAINER_ICON = "\U0001F4E6"
ICON_POINT_SIZE = 15
LABEL_POINT_SIZE = 9


def _color(value: str) -> QtGui.QColor:
    red, green, blue, alpha = graph_layout.parse_rgba(value)
    return QtGui.QColor(red, green, blue, alpha)


class DependencyCanvas(QtWidgets.QWidget):
    """Виджет с графом; клик по узлу отправляет сигнал `node_selected`."""

    node_selected = QtCore.Signal(object)

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._tree = DependencyTree()
        self._layout = graph_layout.GraphLayout()
        self._nodes: Dict[str, Node] = {}
        self._label_color = QtGui.QColor("#ffffff")
        self.setMouseTracking(True)

    def set_label_color(self, color: str) -> None:
        self._label_color = _color(color)
        self.update()

    def set_tree(self, tree: DependencyTree) -> None:
        """Пересчитывает раскладку и перерисовывает холст."""

        self._tree = tree
        self._layout = graph_layout.compute_layout(tree)
        self._nodes = {network.id: network for network in tree.networks}
        self._nodes.update({container.id: container for container in tree.containers})
        width, height = graph_layout.canvas_size(self._layout)
        self.setMinimumSize(width, height)
        self.update()

    def node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    # ------------------------------------------------------------------ events
    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:
        point = event.position()
        node_id = graph_layout.hit_test(self._layout, point.x(), point.y())
        if node_id is not None:
            self.node_selected.emit(self._nodes[node_id])
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:
        point = event.position()
        over_node = graph_layout.hit_test(self._layout, point.x(), point.y()) is not None
        cursor = QtCore.Qt.CursorShape.PointingHandCursor if over_node else QtCore.Qt.CursorShape.ArrowCursor
        self.setCursor(cursor)
        super().mouseMoveEvent(event)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        try:
            self._paint_edges(painter)
            for network in self._tree.networks:
                self._paint_node(
                    painter,
                    network.id,
                    graph_layout.NETWORK_STROKE,
                    graph_layout.NETWORK_STROKE_WIDTH,
                    NETWORK_ICON,
                    network.name,
                )
            for container in self._tree.containers:
                self._paint_node(
                    painter,
                    container.id,
                    graph_layout.container_stroke(container.state),
                    graph_layout.CONTAINER_STROKE_WIDTH,
                    CONTAINER_ICON,
                    graph_layout.truncate_label(container.name),
                )
        finally:
            painter.end()

    # ---------------------------------------------------------------- painting
    def _paint_edges(self, painter: QtGui.QPainter) -> None:
        painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        for edge in resolve_edges(self._tree):
            start = self._layout.get(edge.source)
            end = self._layout.get(edge.target)
            if start is None or end is None:
                continue
            style = graph_layout.EDGE_STYLES[edge.kind]
            pen = QtGui.QPen(_color(style.color), style.width)
            if style.dash:
                pen.setDashPattern([value / style.width for value in style.dash])
            painter.setPen(pen)
            if style.curved:
                control_x, control_y = graph_layout.quadratic_control_point(start, end)
                path = QtGui.QPainterPath(QtCore.QPointF(start.x, start.y))
                path.quadTo(QtCore.QPointF(control_x, control_y), QtCore.QPointF(end.x, end.y))
                painter.drawPath(path)
            else:
                painter.drawLine(QtCore.QPointF(start.x, start.y), QtCore.QPointF(end.x, end.y))

    def _paint_node(
        self,
        painter: QtGui.QPainter,
        node_id: str,
        stroke: str,
        stroke_width: int,
        icon: str,
        label: str,
    ) -> None:
        position = self._layout.get(node_id)
        if position is None:
            return
        center = QtCore.QPointF(position.x, position.y)
        radius = graph_layout.NODE_RADIUS
        painter.setPen(QtGui.QPen(_color(stroke), stroke_width))
        painter.setBrush(_color(graph_layout.NODE_FILL))
        painter.drawEllipse(center, radius, radius)

        font = painter.font()
        font.setPointSize(ICON_POINT_SIZE)
        painter.setFont(font)
        icon_rect = QtCore.QRectF(position.x - radius, position.y - radius, radius * 2, radius * 2)
        painter.drawText(icon_rect, QtCore.Qt.AlignmentFlag.AlignCenter, icon)

        font.setPointSize(LABEL_POINT_SIZE)
        painter.setFont(font)
        painter.setPen(self._label_color)
        label_y = position.y + graph_layout.LABEL_OFFSET_Y
        label_rect = QtCore.QRectF(
            position.x - graph_layout.LEFT_MARGIN, label_y - 10, graph_layout.LEFT_MARGIN * 2, 20
        )
        painter.drawText(label_rect, QtCore.Qt.AlignmentFlag.AlignCenter, label)
