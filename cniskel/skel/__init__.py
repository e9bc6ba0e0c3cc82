"""Skeleton for CNI plugins: argument parsing, validation and command dispatch."""

from .args import CMD_ENV_VARS, EnvVarSpec, extract_cmd_args
from .dispatcher import Dispatcher
from .entry import plugin_main, plugin_main_funcs, plugin_main_funcs_with_error, plugin_main_with_error
from .negotiate import VersionNegotiator
from .netconf import NetworkConfigHeader, validate_config

__all__ = [
    "CMD_ENV_VARS",
    "Dispatcher",
    "EnvVarSpec",
    "NetworkConfigHeader",
    "VersionNegotiator",
    "extract_cmd_args",
    "plugin_main",
    "plugin_main_funcs",
    "plugin_main_funcs_with_error",
    "plugin_main_with_error",
    "validate_config",
]
