"""Top-level "main" functions a plugin executable calls."""

from __future__ import annotations

from loguru import logger

from cniskel.config.access import get_settings
from cniskel.core.errors import CNIError
from cniskel.core.types import CNIFuncs, Handler
from cniskel.skel.dispatcher import Dispatcher
from cniskel.utils.logging_utils import configure_fallback_logging, configure_logging
from cniskel.version import PluginInfo


def _setup_logging() -> None:
    # Invalid CNISKEL_* settings fall back to plain stderr logging.
    try:
        configure_logging(get_settings())
    except (OSError, ValueError) as exc:
        configure_fallback_logging()
        logger.warning("Logging setup failed, using stderr defaults: {}", exc)


def plugin_main_funcs_with_error(funcs: CNIFuncs, plugin_info: PluginInfo, about: str = "") -> CNIError | None:
    """Core "main" for a plugin; returns the error instead of exiting.

    To comply with the CNI spec the caller must print a returned error as JSON
    to stdout and exit non-zero. Use ``plugin_main_funcs`` to have that done
    automatically.
    """
    _setup_logging()
    return Dispatcher.from_process().plugin_main(funcs, plugin_info, about)


def plugin_main_with_error(
    cmd_add: Handler | None,
    cmd_check: Handler | None,
    cmd_del: Handler | None,
    plugin_info: PluginInfo,
    about: str = "",
) -> CNIError | None:
    """Three-handler form kept for plugins written before GC existed."""
    return plugin_main_funcs_with_error(CNIFuncs(add=cmd_add, check=cmd_check, delete=cmd_del), plugin_info, about)


def _exit_with_error(err: CNIError | None) -> None:
    if err is None:
        return
    try:
        err.print()
    except (OSError, ValueError) as exc:
        logger.error("Error writing error JSON to stdout: {}", exc)
    raise SystemExit(1)


def plugin_main_funcs(funcs: CNIFuncs, plugin_info: PluginInfo, about: str = "") -> None:
    """Core "main" with automatic error handling.

    ``about`` is printed on stderr when CNI_COMMAND is unset; the recommended
    form is ``"CNI plugin <name> v<version>"``. Any error is printed as JSON on
    stdout and the process exits with status 1.
    """
    _exit_with_error(plugin_main_funcs_with_error(funcs, plugin_info, about))


def plugin_main(
    cmd_add: Handler | None,
    cmd_check: Handler | None,
    cmd_del: Handler | None,
    plugin_info: PluginInfo,
    about: str = "",
) -> None:
    """Three-handler form of ``plugin_main_funcs``."""
    _exit_with_error(plugin_main_with_error(cmd_add, cmd_check, cmd_del, plugin_info, about))
