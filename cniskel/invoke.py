"""Runtime side of the protocol: execute a plugin binary like a container runtime would."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from cniskel.core.errors import CNIError, ErrorCode
from cniskel.version import PluginInfo, decode_plugin_info

# The plugin must receive some JSON on stdin even for VERSION.
_VERSION_STDIN = b'{"cniVersion":"0.1.0"}'


@dataclass(slots=True)
class InvokeArgs:
    command: str
    container_id: str = ""
    netns: str = ""
    if_name: str = ""
    plugin_args: str = ""
    path: str = ""
    netns_override: bool = False

    def as_env(self) -> dict[str, str]:
        env = {
            "CNI_COMMAND": self.command,
            "CNI_CONTAINERID": self.container_id,
            "CNI_NETNS": self.netns,
            "CNI_IFNAME": self.if_name,
            "CNI_ARGS": self.plugin_args,
            "CNI_PATH": self.path,
        }
        if self.netns_override:
            env["CNI_NETNS_OVERRIDE"] = "1"
        return env


def plugin_error(stdout: bytes, stderr: bytes, returncode: int) -> CNIError:
    """Build the error a failed plugin reported, or describe why none could be read."""
    if not stdout.strip():
        if not stderr.strip():
            return CNIError(ErrorCode.UNKNOWN, f"netplugin failed with no error message: exit status {returncode}")
        return CNIError(ErrorCode.UNKNOWN, f"netplugin failed: {stderr.decode('utf-8', errors='replace')!r}")
    try:
        return CNIError.from_json(stdout)
    except ValueError as exc:
        text = stdout.decode("utf-8", errors="replace")
        return CNIError(ErrorCode.UNKNOWN, f"netplugin failed but error parsing its diagnostic message {text!r}: {exc}")


def exec_plugin(
    plugin: str | Path,
    stdin_data: bytes,
    args: InvokeArgs,
    *,
    timeout_seconds: float | None = None,
) -> bytes:
    """Run ``plugin`` and return its stdout; raise CNIError on non-zero exit."""
    env = {**os.environ, **args.as_env()}
    if not args.netns_override:
        env.pop("CNI_NETNS_OVERRIDE", None)
    logger.debug("Executing {} {}", plugin, args.command)
    try:
        proc = subprocess.run(
            [str(plugin)],
            input=stdin_data,
            env=env,
            capture_output=True,
            timeout=timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise CNIError(ErrorCode.TRY_AGAIN_LATER, f"plugin {plugin} timed out after {timeout_seconds}s") from exc
    except OSError as exc:
        raise CNIError(ErrorCode.PLUGIN_NOT_AVAILABLE, f"failed to execute plugin {plugin}", str(exc)) from exc
    if proc.returncode != 0:
        raise plugin_error(proc.stdout, proc.stderr, proc.returncode)
    return proc.stdout


def get_plugin_info(plugin: str | Path, *, timeout_seconds: float | None = None) -> PluginInfo:
    """Ask a plugin which protocol versions it supports."""
    out = exec_plugin(plugin, _VERSION_STDIN, InvokeArgs(command="VERSION"), timeout_seconds=timeout_seconds)
    try:
        return decode_plugin_info(out)
    except ValueError as exc:
        raise CNIError(ErrorCode.DECODING_FAILURE, str(exc)) from exc
