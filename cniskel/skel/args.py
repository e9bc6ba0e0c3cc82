"""Resolution of CNI_* environment variables and stdin into CmdArgs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import IO

from loguru import logger

from cniskel.core.errors import CNIError, ErrorCode
from cniskel.core.types import CmdArgs
from cniskel.skel.netconf import validate_config
from cniskel.validation import validate_container_id, validate_interface_name

COMMAND_VAR = "CNI_COMMAND"

CMD_ADD = "ADD"
CMD_CHECK = "CHECK"
CMD_DEL = "DEL"
CMD_GC = "GC"
CMD_VERSION = "VERSION"


@dataclass(slots=True, frozen=True)
class EnvVarSpec:
    """One environment variable: which commands require it and how to validate it."""

    name: str
    field: str | None
    required_for: frozenset[str] = frozenset()
    validator: Callable[[str], None] | None = None

    def is_required(self, command: str) -> bool:
        return self.name == COMMAND_VAR or command in self.required_for


CMD_ENV_VARS: tuple[EnvVarSpec, ...] = (
    EnvVarSpec(COMMAND_VAR, None, frozenset({CMD_ADD, CMD_CHECK, CMD_DEL, CMD_GC})),
    EnvVarSpec("CNI_CONTAINERID", "container_id", frozenset({CMD_ADD, CMD_CHECK, CMD_DEL}), validate_container_id),
    EnvVarSpec("CNI_NETNS", "netns", frozenset({CMD_ADD, CMD_CHECK})),
    EnvVarSpec("CNI_IFNAME", "if_name", frozenset({CMD_ADD, CMD_CHECK, CMD_DEL}), validate_interface_name),
    EnvVarSpec("CNI_ARGS", "args"),
    EnvVarSpec("CNI_PATH", "path", frozenset({CMD_ADD, CMD_CHECK, CMD_DEL, CMD_GC})),
    EnvVarSpec("CNI_NETNS_OVERRIDE", "netns_override"),
)


def _read_stdin(stdin: IO) -> bytes:
    try:
        data = stdin.read()
    except (OSError, ValueError) as exc:
        raise CNIError(ErrorCode.IO_FAILURE, f"error reading from stdin: {exc}") from exc
    if isinstance(data, str):
        return data.encode("utf-8")
    return data or b""


def extract_cmd_args(getenv: Callable[[str], str], stdin: IO) -> tuple[str, CmdArgs]:
    """Return ``(command, CmdArgs)`` or raise CNIError.

    Every missing required variable is collected into one error, while a
    failing validator aborts immediately.
    """
    command = getenv(COMMAND_VAR) or ""
    values: dict[str, str] = {}
    missing: list[str] = []
    for spec in CMD_ENV_VARS:
        value = getenv(spec.name) or ""
        if spec.field is not None:
            values[spec.field] = value
        if value == "":
            if spec.is_required(command):
                missing.append(spec.name)
        elif command in spec.required_for and spec.validator is not None:
            spec.validator(value)

    if missing:
        raise CNIError(
            ErrorCode.INVALID_ENVIRONMENT_VARIABLES,
            f"required env variables [{','.join(missing)}] missing",
        )

    if command == CMD_VERSION:
        stdin_data = b""
    else:
        stdin_data = _read_stdin(stdin)
        validate_config(stdin_data)

    logger.debug("Resolved {} for container {!r}", command, values.get("container_id"))
    return command, CmdArgs(stdin_data=stdin_data, **values)
