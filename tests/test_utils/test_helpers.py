"""Тесты вспомогательных утилит."""

from __future__ import annotations

import pytest

from dockdeck.utils.helpers import format_bytes, normalize_socket_path, short_id


def test_normalize_socket_path_adds_unix_prefix() -> None:
    assert normalize_socket_path("/var/run/docker.sock") == "unix:///var/run/docker.sock"


def test_normalize_socket_path_keeps_existing_scheme() -> None:
    assert normalize_socket_path("unix:///var/run/docker.sock") == "unix:///var/run/docker.sock"
    assert normalize_socket_path("tcp://127.0.0.1:2375") == "tcp://127.0.0.1:2375"


def test_normalize_socket_path_keeps_relative_values() -> None:
    assert normalize_socket_path("custom-socket") == "custom-socket"
    assert normalize_socket_path("   ") == ""


@pytest.mark.parametrize(
    ("value", "expected"),
    [(512, "512.0 B"), (1536, "1.5 KB"), (3 * 1024**3, "3.0 GB"), ("bad", "N/A"), (None, "N/A")],
)
def test_format_bytes(value: object, expected: str) -> None:
    assert format_bytes(value) == expected


def test_short_id() -> None:
    assert short_id("0123456789abcdef0123") == "0123456789ab"
    assert short_id("sha256:fedcba9876543210") == "fedcba987654"
    assert short_id("abc", length=2) == "ab"
