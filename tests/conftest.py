"""Pytest hooks and fixtures."""

from __future__ import annotations

import io
import sys
from typing import Any

import pytest
from loguru import logger

from cniskel.core.types import CmdArgs
from cniskel.skel.dispatcher import Dispatcher
from cniskel.utils import logging_utils

DEFAULT_CONFIG = b'{"name":"skel-test","cniVersion":"0.4.0","some":"config"}'


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "requires_netns: needs /proc/self/ns/net (Linux only)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip requires_netns tests off Linux."""
    if sys.platform.startswith("linux"):
        return
    skip = pytest.mark.skip(reason="Network namespaces are Linux only")
    for item in items:
        if "requires_netns" in item.keywords:
            item.add_marker(skip)


def base_env(command: str = "ADD", **overrides: str | None) -> dict[str, str]:
    env: dict[str, str | None] = {
        "CNI_COMMAND": command,
        "CNI_CONTAINERID": "some-container-id",
        "CNI_NETNS": "/some/netns/path",
        "CNI_IFNAME": "eth0",
        "CNI_ARGS": "IgnoreUnknown=1;K8S_POD_NAME=pod-a",
        "CNI_PATH": "/some/cni/path",
    }
    env.update(overrides)
    return {k: v for k, v in env.items() if v is not None}


class RecordingHandler:
    """Handler double that records the CmdArgs it was called with."""

    def __init__(self, exc: BaseException | None = None):
        self.calls: list[CmdArgs] = []
        self.exc = exc

    def __call__(self, args: CmdArgs) -> None:
        self.calls.append(args)
        if self.exc is not None:
            raise self.exc


class UnreadableStdin:
    """Stdin double that fails the test if anything reads it."""

    def read(self, *_args: Any) -> bytes:
        raise AssertionError("stdin must not be read")


@pytest.fixture
def make_dispatcher():
    def _make(
        env: dict[str, str],
        stdin: bytes | Any = DEFAULT_CONFIG,
        *,
        netns_checker=lambda _path: False,
        **kwargs: Any,
    ) -> Dispatcher:
        stream = io.BytesIO(stdin) if isinstance(stdin, bytes) else stdin
        return Dispatcher(
            getenv=lambda name: env.get(name, ""),
            stdin=stream,
            stdout=io.StringIO(),
            stderr=io.StringIO(),
            netns_checker=netns_checker,
            **kwargs,
        )

    return _make


@pytest.fixture
def clean_logging():
    """Start from a logger with no sinks and restore a stderr sink afterwards."""
    logger.remove()
    logging_utils._SINK_IDS.clear()
    yield
    logging_utils.reset_logging()
    logger.remove()
    logger.configure(extra={})
    logger.add(logging_utils._stderr_sink, level="DEBUG")
