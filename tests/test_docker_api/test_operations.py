"""Тесты функций docker_api (containers/networks)."""

from __future__ import annotations

from typing import Any

import pytest
import requests
from docker.errors import APIError, NotFound

from dockdeck.docker_api import containers, networks
from dockdeck.docker_api.client import DockerClientWrapper
from dockdeck.docker_api.exceptions import DockerAPIError
from dockdeck.docker_api.models import ContainerInfo


SUMMARIES = [
    {
        "Id": "a1b2c3d4e5f6a7b8",
        "Names": ["/web"],
        "State": "running",
        "Status": "Up 2 hours",
        "Image": "nginx:latest",
        "Ports": [
            {"PrivatePort": 80, "PublicPort": 8080, "Type": "tcp"},
            {"PrivatePort": 443, "Type": "tcp"},
        ],
    },
    {
        "Id": "ffeeddccbbaa0011",
        "Names": [],
        "State": "exited",
        "Status": "Exited (0) 5 minutes ago",
        "Image": "redis:7",
        "Ports": [],
    },
]


class FakeContainer:
    def __init__(self, attrs: dict[str, Any] | None = None) -> None:
        self.attrs = attrs or {"Id": "a1b2c3d4e5f6a7b8", "Name": "/web"}
        self.calls: list[str] = []
        self.logs_kwargs: dict[str, Any] = {}
        self.logs_payload: Any = b"2024-01-01T00:00:00Z hello\x1b\x07\n2024-01-01T00:00:01Z world\n"

    def start(self) -> None:
        self.calls.append("start")

    def stop(self) -> None:
        self.calls.append("stop")

    def restart(self) -> None:
        self.calls.append("restart")

    def logs(self, **kwargs: Any) -> Any:
        self.logs_kwargs = kwargs
        return self.logs_payload


class FakeNetwork:
    def __init__(self, attrs: dict[str, Any]) -> None:
        self.attrs = attrs


class FakeRawClient:
    def __init__(self) -> None:
        self.container = FakeContainer()
        self.missing = False
        self.greedy: bool | None = None

        class Containers:
            def __init__(self, outer: FakeRawClient) -> None:
                self.outer = outer

            def get(self, container_id: str) -> FakeContainer:
                if self.outer.missing:
                    raise NotFound(f"No such container: {container_id}")
                return self.outer.container

        class Networks:
            def __init__(self, outer: FakeRawClient) -> None:
                self.outer = outer

            def list(self, greedy: bool = False) -> list[FakeNetwork]:
                self.outer.greedy = greedy
                return [
                    FakeNetwork(
                        {
                            "Id": "net1",
                            "Name": "bridge",
                            "Driver": "bridge",
                            "Scope": "local",
                            "Containers": {"a1b2c3d4e5f6a7b8": {}, "ffeeddccbbaa0011": {}},
                        }
                    ),
                    FakeNetwork({"Id": "net2", "Name": "none", "Driver": "null", "Scope": "local"}),
                ]

        class API:
            def containers(self, all: bool = False) -> list[dict[str, Any]]:
                assert all is True
                return SUMMARIES

        self.containers = Containers(self)
        self.networks = Networks(self)
        self.api = API()


def make_wrapper() -> DockerClientWrapper:
    return DockerClientWrapper(raw_client=FakeRawClient())


def test_list_containers_maps_summaries() -> None:
    rows = containers.list_containers(make_wrapper())
    assert rows[0] == ContainerInfo(
        id="a1b2c3d4e5f6a7b8",
        name="web",
        state="running",
        status="Up 2 hours",
        image="nginx:latest",
        ports=["8080:80", "443"],
        uptime="Up 2 hours",
    )
    assert rows[1].name == "ffeeddccbbaa"
    assert rows[1].ports == []
    assert rows[1].is_running is False


def test_format_ports_skips_entries_without_private_port() -> None:
    assert containers.format_ports([{"Type": "tcp"}, {"PrivatePort": 53, "PublicPort": 0}]) == ["53"]


def test_summarize_counts_running_and_stopped() -> None:
    rows = containers.list_containers(make_wrapper())
    summary = containers.summarize(rows)
    assert (summary.total, summary.running, summary.stopped) == (2, 1, 1)


@pytest.mark.parametrize(
    ("state", "level"),
    [("running", "success"), ("exited", "danger"), ("paused", "warning"), ("created", "warning")],
)
def test_status_level(state: str, level: str) -> None:
    assert containers.status_level(state) == level


def test_container_actions_call_sdk() -> None:
    wrapper = make_wrapper()
    containers.start_container(wrapper, "web")
    containers.stop_container(wrapper, "web")
    containers.restart_container(wrapper, "web")
    assert wrapper.get_raw_client().container.calls == ["start", "stop", "restart"]


def test_container_action_wraps_docker_errors() -> None:
    wrapper = make_wrapper()
    wrapper.get_raw_client().missing = True
    with pytest.raises(DockerAPIError):
        containers.start_container(wrapper, "ghost")


def test_fetch_logs_decodes_and_strips_control_chars() -> None:
    wrapper = make_wrapper()
    text = containers.fetch_logs(wrapper, "web", tail=50)
    assert text == "2024-01-01T00:00:00Z hello\n2024-01-01T00:00:01Z world\n"
    assert wrapper.get_raw_client().container.logs_kwargs == {
        "stdout": True,
        "stderr": True,
        "tail": 50,
        "timestamps": True,
    }


def test_fetch_logs_replaces_invalid_utf8() -> None:
    wrapper = make_wrapper()
    wrapper.get_raw_client().container.logs_payload = b"caf\xe9\tok"
    assert containers.fetch_logs(wrapper, "web") == "caf\ufffd\tok"


def test_inspect_container_returns_attrs() -> None:
    wrapper = make_wrapper()
    assert containers.inspect_container(wrapper, "web")["Name"] == "/web"


def test_list_containers_wraps_api_error() -> None:
    wrapper = make_wrapper()

    class BrokenAPI:
        def containers(self, all: bool = False) -> list[dict[str, Any]]:
            raise APIError("daemon is gone")

    wrapper.get_raw_client().api = BrokenAPI()
    with pytest.raises(DockerAPIError):
        containers.list_containers(wrapper)


def test_list_networks_uses_greedy_listing() -> None:
    wrapper = make_wrapper()
    rows = networks.list_networks(wrapper)
    assert wrapper.get_raw_client().greedy is True
    assert [row.name for row in rows] == ["bridge", "none"]
    assert rows[0].containers == ["a1b2c3d4e5f6a7b8", "ffeeddccbbaa0011"]
    assert rows[1].containers == []
    assert rows[0].type == "network"


def test_transport_errors_become_docker_api_errors() -> None:
    wrapper = make_wrapper()

    class DroppedAPI:
        def containers(self, all: bool = False) -> list[dict[str, Any]]:
            raise requests.exceptions.ConnectionError("daemon gone")

    class DroppedNetworks:
        def list(self, greedy: bool = False) -> list[Any]:
            raise requests.exceptions.ReadTimeout("read timed out")

    wrapper.get_raw_client().api = DroppedAPI()
    wrapper.get_raw_client().networks = DroppedNetworks()
    with pytest.raises(DockerAPIError, match="daemon gone"):
        containers.list_containers(wrapper)
    with pytest.raises(DockerAPIError, match="read timed out"):
        networks.list_networks(wrapper)
