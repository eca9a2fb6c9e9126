"""Тесты раскладки графа зависимостей."""

from __future__ import annotations

import pytest

from dockdeck.docker_api.models import ContainerNode, DependencyTree, NetworkNode
from dockdeck.graph import layout
from dockdeck.graph.layout import (
    KIND_CONTAINER,
    KIND_NETWORK,
    GraphLayout,
    NodePosition,
    canvas_size,
    compute_layout,
    container_stroke,
    hit_test,
    parse_rgba,
    quadratic_control_point,
    truncate_label,
)


def make_tree(containers: int = 3, networks: int = 2) -> DependencyTree:
    return DependencyTree(
        containers=[
            ContainerNode(id=f"c{index}", name=f"container-{index}", state="running", image="img")
            for index in range(containers)
        ],
        networks=[
            NetworkNode(id=f"n{index}", name=f"net-{index}", driver="bridge", scope="local")
            for index in range(networks)
        ],
    )


def test_networks_on_top_row() -> None:
    result = compute_layout(make_tree())
    assert result.get("n0") == NodePosition(100, 100, KIND_NETWORK)
    assert result.get("n1") == NodePosition(325, 100, KIND_NETWORK)


def test_containers_are_staggered() -> None:
    result = compute_layout(make_tree())
    assert result.get("c0") == NodePosition(100, 300, KIND_CONTAINER)
    assert result.get("c1") == NodePosition(250, 380, KIND_CONTAINER)
    assert result.get("c2") == NodePosition(400, 300, KIND_CONTAINER)
    assert len(result) == 5


def test_empty_tree_has_no_positions() -> None:
    result = compute_layout(DependencyTree())
    assert len(result) == 0
    assert canvas_size(result) == (0, 0)


def test_quadratic_control_point_sits_above_container() -> None:
    start = NodePosition(250, 380, KIND_CONTAINER)
    end = NodePosition(100, 100, KIND_NETWORK)
    assert quadratic_control_point(start, end) == (250, 240)


def test_hit_test_inside_and_outside_radius() -> None:
    result = compute_layout(make_tree())
    assert hit_test(result, 110, 105) == "n0"
    assert hit_test(result, 100, 330) == "c0"
    assert hit_test(result, 100, 331) is None
    assert hit_test(result, 600, 600) is None


def test_hit_test_prefers_last_overlapping_node() -> None:
    overlapping = GraphLayout(
        positions={
            "first": NodePosition(100, 100, KIND_NETWORK),
            "second": NodePosition(120, 100, KIND_CONTAINER),
        }
    )
    assert hit_test(overlapping, 110, 100) == "second"


def test_truncate_label() -> None:
    assert truncate_label("a-very-long-container-name") == "a-very-long-con"
    assert truncate_label("short") == "short"


def test_container_stroke() -> None:
    assert container_stroke("running") == layout.RUNNING_STROKE
    assert container_stroke("exited") == layout.STOPPED_STROKE
    assert container_stroke("paused") == layout.STOPPED_STROKE


def test_edge_styles() -> None:
    assert layout.EDGE_STYLES["network"].color == "#00f2ff30"
    assert layout.EDGE_STYLES["network"].curved is True
    assert layout.EDGE_STYLES["volumes_from"].dash == (5, 5)
    assert layout.EDGE_STYLES["link"].color == "#00ff9950"


def test_parse_rgba() -> None:
    assert parse_rgba("#00f2ff30") == (0, 242, 255, 48)
    assert parse_rgba("#1e293b") == (30, 41, 59, 255)
    with pytest.raises(ValueError):
        parse_rgba("#fff")


def test_canvas_size_covers_all_nodes() -> None:
    result = compute_layout(make_tree())
    width, height = canvas_size(result)
    assert width == 400 + layout.NODE_RADIUS + layout.LEFT_MARGIN
    assert height == 380 + layout.LABEL_OFFSET_Y + layout.NODE_RADIUS
