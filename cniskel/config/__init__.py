"""Configuration module for cniskel."""

from cniskel.config.schema import SkelSettings
from cniskel.config.access import get_settings, clear_settings_cache

__all__ = ["SkelSettings", "get_settings", "clear_settings_cache"]
