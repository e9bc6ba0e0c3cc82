"""CNI protocol versions: parsing, config decoding, plugin info and reconciliation."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import TextIO

from pydantic import BaseModel, ConfigDict, Field, ValidationError

CURRENT_VERSION = "1.1.0"

ALL_VERSIONS: tuple[str, ...] = ("0.1.0", "0.2.0", "0.3.0", "0.3.1", "0.4.0", "1.0.0", "1.1.0")

# Lowest protocol revisions that define the CHECK and GC verbs.
CHECK_MIN_VERSION = "0.4.0"
GC_MIN_VERSION = "1.1.0"

_INT_PART = re.compile(r"[+-]?[0-9]+")


def parse_version(version: str) -> tuple[int, int, int]:
    """Parse ``major[.minor[.micro]]``; an empty string means 0.1.0."""
    if version == "":
        return 0, 1, 0
    parts = version.split(".")
    if len(parts) >= 4:
        raise ValueError(f"invalid version {version!r}: too many parts")
    numbers = [0, 0, 0]
    for idx, (label, part) in enumerate(zip(("major", "minor", "micro"), parts)):
        if not _INT_PART.fullmatch(part):
            raise ValueError(f"failed to convert {label} version part {part!r}")
        numbers[idx] = int(part)
    return numbers[0], numbers[1], numbers[2]


def greater_than_or_equal_to(version: str, other: str) -> bool:
    """Return True when ``version`` >= ``other``."""
    return parse_version(version) >= parse_version(other)


def verbs_for_version(version: str) -> list[str]:
    """Commands defined by a given protocol revision."""
    verbs = ["ADD", "DEL", "VERSION"]
    if greater_than_or_equal_to(version, CHECK_MIN_VERSION):
        verbs.append("CHECK")
    if greater_than_or_equal_to(version, GC_MIN_VERSION):
        verbs.append("GC")
    return verbs


class PluginInfo(BaseModel):
    """Versions a plugin declares support for; printed on VERSION."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    cni_version: str = Field(default=CURRENT_VERSION, alias="cniVersion")
    supported_versions: tuple[str, ...] = Field(default=(), alias="supportedVersions")

    def encode(self, stream: TextIO) -> None:
        stream.write(self.model_dump_json(by_alias=True) + "\n")


def plugin_supports(*versions: str) -> PluginInfo:
    if not versions:
        raise ValueError("programmer error: you must support at least one version")
    return PluginInfo(cni_version=CURRENT_VERSION, supported_versions=versions)


LEGACY = plugin_supports("0.1.0", "0.2.0")
ALL = plugin_supports(*ALL_VERSIONS)


class _PluginInfoWire(BaseModel):
    cni_version: str | None = Field(default=None, alias="cniVersion")
    supported_versions: list[str] | None = Field(default=None, alias="supportedVersions")


def decode_plugin_info(data: bytes | str) -> PluginInfo:
    """Decode the JSON a plugin prints for VERSION."""
    try:
        wire = _PluginInfoWire.model_validate_json(data)
    except ValidationError as exc:
        raise ValueError(f"decoding version info: {exc}") from exc
    if not wire.cni_version:
        raise ValueError("decoding version info: missing field cniVersion")
    if not wire.supported_versions:
        # Plugins speaking 0.2.0 predate supportedVersions.
        if wire.cni_version == "0.2.0":
            return LEGACY
        raise ValueError("decoding version info: missing field supportedVersions")
    return PluginInfo(cni_version=wire.cni_version, supported_versions=tuple(wire.supported_versions))


class _VersionHeader(BaseModel):
    cni_version: str | None = Field(default=None, alias="cniVersion")


class ConfigDecoder:
    """Reads ``cniVersion`` from a network configuration."""

    def decode(self, data: bytes) -> str:
        try:
            header = _VersionHeader.model_validate_json(data)
        except ValidationError as exc:
            raise ValueError(f"decoding version from network config: {exc}") from exc
        return header.cni_version or "0.1.0"


@dataclass(slots=True, frozen=True)
class IncompatibleVersion:
    config: str
    supported: tuple[str, ...]

    def details(self) -> str:
        quoted = " ".join(json.dumps(v) for v in self.supported)
        return f"config is {json.dumps(self.config)}, plugin supports [{quoted}]"

    def __str__(self) -> str:
        return f"incompatible CNI versions: {self.details()}"


class Reconciler:
    """Accepts a config version only if the plugin lists it verbatim."""

    def check(self, config_version: str, plugin_info: PluginInfo) -> IncompatibleVersion | None:
        if config_version in plugin_info.supported_versions:
            return None
        return IncompatibleVersion(config=config_version, supported=tuple(plugin_info.supported_versions))
