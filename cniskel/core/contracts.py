"""Collaborator contracts consumed by the dispatcher."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cniskel.version import IncompatibleVersion, PluginInfo


@runtime_checkable
class IdentifierValidator(Protocol):
    """Raises CNIError when ``value`` is not acceptable."""

    def __call__(self, value: str) -> None: ...


@runtime_checkable
class NetNSChecker(Protocol):
    """Returns True when ``netns_path`` is the plugin's own network namespace."""

    def __call__(self, netns_path: str) -> bool: ...


@runtime_checkable
class ConfigDecoder(Protocol):
    """Extracts the declared protocol version; raises ValueError on malformed input."""

    def decode(self, data: bytes) -> str: ...


@runtime_checkable
class VersionReconciler(Protocol):
    def check(self, config_version: str, plugin_info: PluginInfo) -> IncompatibleVersion | None: ...


@runtime_checkable
class VersionComparer(Protocol):
    """``a >= b``; raises ValueError when either version cannot be parsed."""

    def __call__(self, a: str, b: str) -> bool: ...
