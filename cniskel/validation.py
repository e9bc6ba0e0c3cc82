"""Syntax checks for container IDs, network names and interface names."""

from __future__ import annotations

import re

from cniskel.core.errors import CNIError, ErrorCode

# Container IDs and network names share the same character set.
_ID_PATTERN = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9_.\-]*")

MAX_INTERFACE_NAME_LENGTH = 15


def validate_container_id(container_id: str) -> None:
    if container_id == "":
        raise CNIError(ErrorCode.UNKNOWN_CONTAINER, "missing containerID")
    if not _ID_PATTERN.fullmatch(container_id):
        raise CNIError(ErrorCode.INVALID_ENVIRONMENT_VARIABLES, "invalid characters in containerID", container_id)


def validate_network_name(name: str) -> None:
    if name == "":
        raise CNIError(ErrorCode.INVALID_NETWORK_CONFIG, "missing network name:")
    if not _ID_PATTERN.fullmatch(name):
        raise CNIError(ErrorCode.INVALID_NETWORK_CONFIG, "invalid characters found in network name", name)


def validate_interface_name(if_name: str) -> None:
    """Mirror the kernel's dev_valid_name() rules."""
    if if_name == "":
        raise CNIError(ErrorCode.INVALID_ENVIRONMENT_VARIABLES, "interface name is empty")
    if len(if_name.encode("utf-8")) > MAX_INTERFACE_NAME_LENGTH:
        raise CNIError(
            ErrorCode.INVALID_ENVIRONMENT_VARIABLES,
            "interface name is too long",
            f"interface name should be less than {MAX_INTERFACE_NAME_LENGTH + 1} characters",
        )
    if if_name in (".", ".."):
        raise CNIError(ErrorCode.INVALID_ENVIRONMENT_VARIABLES, "interface name is . or ..")
    if any(ch in "/:" or ch.isspace() for ch in if_name):
        raise CNIError(
            ErrorCode.INVALID_ENVIRONMENT_VARIABLES,
            "interface name contains / or : or whitespace characters",
        )
