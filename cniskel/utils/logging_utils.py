"""Loguru helpers for plugin processes.

Stdout carries protocol output, so log records only ever go to stderr and,
optionally, to a rotating file.
"""

from __future__ import annotations

import sys
from contextlib import suppress
from pathlib import Path

from loguru import logger

from cniskel.config.schema import SkelSettings

_SINK_IDS: dict[str, int] = {}
_DEFAULT_SINK_ID = 0


def _stderr_sink(message: str) -> None:
    # Resolve sys.stderr per record; it may be swapped after configuration.
    sys.stderr.write(message)


def ensure_rotating_log_file(path: str | Path, settings: SkelSettings) -> Path:
    """Ensure a rotating log sink for the given file."""
    log_path = Path(path).expanduser()
    key = f"file:{log_path}"
    if key in _SINK_IDS:
        return log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    _SINK_IDS[key] = logger.add(
        str(log_path),
        level=settings.log_level,
        format=settings.log_format,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    return log_path


def configure_logging(settings: SkelSettings, *, force: bool = False) -> None:
    """Install the stderr (and optional file) sinks once per process."""
    if "stderr" in _SINK_IDS and not force:
        return
    reset_logging()
    logger.configure(extra={"plugin": settings.plugin_name})
    _SINK_IDS["stderr"] = logger.add(
        _stderr_sink,
        level=settings.log_level,
        format=settings.log_format,
        backtrace=False,
        diagnose=False,
    )
    if settings.log_file:
        ensure_rotating_log_file(settings.log_file, settings)


def configure_fallback_logging() -> None:
    """Plain WARNING-level stderr sink used when the configured one cannot be built."""
    reset_logging()
    _SINK_IDS["stderr"] = logger.add(_stderr_sink, level="WARNING", backtrace=False, diagnose=False)


def reset_logging() -> None:
    """Drop the sinks installed here and loguru's default one.

    Sinks added by the plugin itself are left in place.
    """
    for sink_id in (_DEFAULT_SINK_ID, *_SINK_IDS.values()):
        # Already removed elsewhere.
        with suppress(ValueError):
            logger.remove(sink_id)
    _SINK_IDS.clear()
