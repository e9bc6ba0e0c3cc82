"""Protocol version negotiation between a network config and a plugin."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from cniskel.core.contracts import ConfigDecoder, VersionComparer, VersionReconciler
from cniskel.core.errors import CNIError, ErrorCode, wrap_handler_error
from cniskel.core.types import CmdArgs, Handler
from cniskel.version import PluginInfo


@dataclass(slots=True)
class VersionNegotiator:
    decoder: ConfigDecoder
    reconciler: VersionReconciler
    compare: VersionComparer

    def decode_config_version(self, cmd_args: CmdArgs) -> str:
        try:
            return self.decoder.decode(cmd_args.stdin_data)
        except ValueError as exc:
            raise CNIError(ErrorCode.DECODING_FAILURE, str(exc)) from exc

    def _gte(self, version: str, other: str) -> bool:
        try:
            return self.compare(version, other)
        except ValueError as exc:
            raise CNIError(ErrorCode.DECODING_FAILURE, str(exc)) from exc

    def check_and_call(self, cmd_args: CmdArgs, plugin_info: PluginInfo, handler: Handler | None) -> None:
        """Reconcile the config version with the plugin, then run ``handler``."""
        config_version = self.decode_config_version(cmd_args)
        incompatible = self.reconciler.check(config_version, plugin_info)
        if incompatible is not None:
            raise CNIError(ErrorCode.INCOMPATIBLE_CNI_VERSION, "incompatible CNI versions", incompatible.details())

        if handler is None:
            return
        try:
            handler(cmd_args)
        except CNIError:
            raise
        except Exception as exc:
            raise wrap_handler_error(exc) from exc

    def check_gated_and_call(
        self,
        command: str,
        min_version: str,
        cmd_args: CmdArgs,
        plugin_info: PluginInfo,
        handler: Handler | None,
    ) -> None:
        """Negotiation for verbs added after the original protocol (CHECK, GC).

        The config must declare at least ``min_version``. The plugin's versions
        are scanned in declared order and the first one able to serve the
        config version admits the call, which still has to pass reconciliation.
        """
        config_version = self.decode_config_version(cmd_args)
        if not self._gte(config_version, min_version):
            raise CNIError(ErrorCode.INCOMPATIBLE_CNI_VERSION, f"config version does not allow {command}")

        for plugin_version in plugin_info.supported_versions:
            if self._gte(plugin_version, config_version):
                logger.debug("{}: plugin version {} serves config version {}", command, plugin_version, config_version)
                self.check_and_call(cmd_args, plugin_info, handler)
                return
        raise CNIError(ErrorCode.INCOMPATIBLE_CNI_VERSION, f"plugin version does not allow {command}")
