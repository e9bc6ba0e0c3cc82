"""Settings schema using Pydantic.

Settings only shape diagnostics (logging); the CNI protocol itself is driven
by the CNI_* variables read through the dispatcher.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class SkelSettings(BaseSettings):
    """Process settings read from CNISKEL_* environment variables."""
    log_level: str = "WARNING"
    log_file: str | None = None  # Optional rotating log file, stderr is always used
    log_rotation: str = "10 MB"
    log_retention: str = "14 days"
    log_format: str = "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} {level} [{extra[plugin]}] {message}"
    plugin_name: str = "cni-plugin"  # Bound as extra["plugin"] on every record

    model_config = SettingsConfigDict(
        env_prefix="CNISKEL_",
        extra="ignore",
    )
