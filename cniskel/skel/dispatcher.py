"""Command dispatch for a single plugin invocation."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import IO, TextIO

from loguru import logger

from cniskel.core.contracts import ConfigDecoder, NetNSChecker, VersionComparer, VersionReconciler
from cniskel.core.errors import CNIError, ErrorCode, wrap_handler_error
from cniskel.core.types import CmdArgs, CNIFuncs
from cniskel.netns import check_netns
from cniskel.skel.args import (
    CMD_ADD,
    CMD_CHECK,
    CMD_DEL,
    CMD_GC,
    CMD_VERSION,
    COMMAND_VAR,
    extract_cmd_args,
)
from cniskel.skel.negotiate import VersionNegotiator
from cniskel.version import (
    CHECK_MIN_VERSION,
    GC_MIN_VERSION,
    ConfigDecoder as DefaultConfigDecoder,
    PluginInfo,
    Reconciler,
    greater_than_or_equal_to,
)


def _process_getenv(name: str) -> str:
    return os.environ.get(name, "")


@dataclass(slots=True)
class Dispatcher:
    """Process capabilities and collaborators used by one invocation.

    Everything that would otherwise be ambient process state is a field, so
    tests can drive a full invocation with fakes.
    """

    getenv: Callable[[str], str]
    stdin: IO
    stdout: TextIO
    stderr: TextIO
    config_decoder: ConfigDecoder = field(default_factory=DefaultConfigDecoder)
    reconciler: VersionReconciler = field(default_factory=Reconciler)
    compare: VersionComparer = greater_than_or_equal_to
    netns_checker: NetNSChecker = check_netns

    @classmethod
    def from_process(cls) -> Dispatcher:
        """Bind to the real environment and standard streams."""
        return cls(getenv=_process_getenv, stdin=sys.stdin.buffer, stdout=sys.stdout, stderr=sys.stderr)

    @property
    def negotiator(self) -> VersionNegotiator:
        return VersionNegotiator(decoder=self.config_decoder, reconciler=self.reconciler, compare=self.compare)

    def plugin_main(self, funcs: CNIFuncs, plugin_info: PluginInfo, about: str = "") -> CNIError | None:
        """Run one invocation; return the error to report, or None on success."""
        try:
            self._dispatch(funcs, plugin_info, about)
        except CNIError as err:
            logger.warning("CNI command failed with code {}: {}", int(err.code), err)
            return err
        return None

    def _dispatch(self, funcs: CNIFuncs, plugin_info: PluginInfo, about: str) -> None:
        try:
            command, cmd_args = extract_cmd_args(self.getenv, self.stdin)
        except CNIError as err:
            if err.code == ErrorCode.INVALID_ENVIRONMENT_VARIABLES and not self.getenv(COMMAND_VAR) and about:
                self._print_about(about, plugin_info)
                return
            raise

        negotiator = self.negotiator
        if command == CMD_ADD:
            negotiator.check_and_call(cmd_args, plugin_info, funcs.add)
            self._ensure_foreign_netns(cmd_args)
        elif command == CMD_CHECK:
            negotiator.check_gated_and_call(CMD_CHECK, CHECK_MIN_VERSION, cmd_args, plugin_info, funcs.check)
        elif command == CMD_DEL:
            negotiator.check_and_call(cmd_args, plugin_info, funcs.delete)
            self._ensure_foreign_netns(cmd_args)
        elif command == CMD_GC:
            negotiator.check_gated_and_call(CMD_GC, GC_MIN_VERSION, cmd_args, plugin_info, funcs.gc)
        elif command == CMD_VERSION:
            try:
                plugin_info.encode(self.stdout)
            except (OSError, ValueError) as exc:
                raise CNIError(ErrorCode.IO_FAILURE, str(exc)) from exc
        else:
            raise CNIError(ErrorCode.INVALID_ENVIRONMENT_VARIABLES, f"unknown {COMMAND_VAR}: {command}")

    def _ensure_foreign_netns(self, cmd_args: CmdArgs) -> None:
        """A plugin must never configure the namespace it is running in."""
        if cmd_args.netns_override_enabled:
            return
        try:
            is_plugin_netns = self.netns_checker(cmd_args.netns)
        except CNIError:
            raise
        except Exception as exc:
            raise wrap_handler_error(exc) from exc
        if is_plugin_netns:
            raise CNIError(
                ErrorCode.INVALID_NETNS,
                "plugin's netns and netns from CNI_NETNS should not be the same",
            )

    def _print_about(self, about: str, plugin_info: PluginInfo) -> None:
        self.stderr.write(about + "\n")
        self.stderr.write(
            "CNI protocol versions supported: " + ", ".join(plugin_info.supported_versions) + "\n"
        )
