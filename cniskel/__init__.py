"""
cniskel - skeleton for writing CNI network plugins in Python.
"""

__version__ = "0.1.0"

from cniskel.core.errors import CNIError, ErrorCode
from cniskel.core.types import CmdArgs, CNIFuncs
from cniskel.skel import (
    Dispatcher,
    plugin_main,
    plugin_main_funcs,
    plugin_main_funcs_with_error,
    plugin_main_with_error,
)
from cniskel.version import ALL, LEGACY, PluginInfo, plugin_supports

__all__ = [
    "ALL",
    "CNIError",
    "CNIFuncs",
    "CmdArgs",
    "Dispatcher",
    "ErrorCode",
    "LEGACY",
    "PluginInfo",
    "__version__",
    "plugin_main",
    "plugin_main_funcs",
    "plugin_main_funcs_with_error",
    "plugin_main_with_error",
    "plugin_supports",
]
