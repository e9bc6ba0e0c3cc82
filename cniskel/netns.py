"""Network namespace identity check."""

from __future__ import annotations

import os

from loguru import logger

from cniskel.core.errors import CNIError, ErrorCode

PLUGIN_NETNS_PATH = "/proc/self/ns/net"


def check_netns(netns_path: str, *, plugin_netns_path: str = PLUGIN_NETNS_PATH) -> bool:
    """Return True if ``netns_path`` is the namespace this process runs in.

    A path that cannot be opened is not the plugin's namespace; DEL is allowed
    for namespaces the runtime already removed.
    """
    try:
        target = os.stat(netns_path)
    except OSError as exc:
        logger.debug("netns {} not accessible: {}", netns_path, exc)
        return False
    try:
        own = os.stat(plugin_netns_path)
    except OSError as exc:
        raise CNIError(ErrorCode.INVALID_NETNS, "get plugin's netns failed", str(exc)) from exc
    return (target.st_dev, target.st_ino) == (own.st_dev, own.st_ino)
