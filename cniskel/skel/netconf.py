"""Minimal network configuration validation done before any handler runs."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from cniskel.core.errors import CNIError, ErrorCode
from cniskel.validation import validate_network_name


class NetworkConfigHeader(BaseModel):
    """The only part of the network configuration the skeleton inspects.

    Keys match ``name`` case-insensitively (``Name``, ``NAME``), as runtimes
    built on Go's encoding/json accept them; the last matching key wins.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _fold_name_key(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        keys = [k for k in data if isinstance(k, str) and k.lower() == "name"]
        if not keys or keys == ["name"]:
            return data
        folded = {k: v for k, v in data.items() if k not in keys}
        folded["name"] = data[keys[-1]]
        return folded


def validate_config(data: bytes) -> None:
    try:
        conf = NetworkConfigHeader.model_validate_json(data)
    except ValidationError as exc:
        raise CNIError(ErrorCode.DECODING_FAILURE, f"error unmarshall network config: {exc}") from exc
    if not conf.name:
        raise CNIError(ErrorCode.INVALID_NETWORK_CONFIG, "missing network name")
    validate_network_name(conf.name)
