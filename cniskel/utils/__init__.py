"""Utility functions for cniskel."""

from cniskel.utils.logging_utils import (
    configure_fallback_logging,
    configure_logging,
    ensure_rotating_log_file,
    reset_logging,
)

__all__ = ["configure_fallback_logging", "configure_logging", "ensure_rotating_log_file", "reset_logging"]
