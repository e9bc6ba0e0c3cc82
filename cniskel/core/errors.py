"""
CNI error taxonomy and wire serialization.

Provides:
- ErrorCode with the well-known CNI error codes
- CNIError, the single exception type surfaced to the container runtime
- JSON encoding/decoding of the error object printed on stdout
- Classification of arbitrary handler failures
"""

from __future__ import annotations

import json
import sys
from enum import IntEnum
from typing import Any, TextIO


class ErrorCode(IntEnum):
    """Well-known CNI error codes (values are part of the wire protocol)."""
    UNKNOWN = 0
    INCOMPATIBLE_CNI_VERSION = 1
    UNSUPPORTED_FIELD = 2
    UNKNOWN_CONTAINER = 3
    INVALID_ENVIRONMENT_VARIABLES = 4
    IO_FAILURE = 5
    DECODING_FAILURE = 6
    INVALID_NETWORK_CONFIG = 7
    INVALID_NETNS = 8
    TRY_AGAIN_LATER = 11
    PLUGIN_NOT_AVAILABLE = 50
    LIMITED_CONNECTIVITY = 51
    INTERNAL = 999


class CNIError(Exception):
    """Error reported back to the runtime as ``{"code", "msg", "details"}``."""

    def __init__(self, code: int, message: str, details: str = ""):
        super().__init__(message)
        self.code = _coerce_code(code)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": int(self.code), "msg": self.message}
        if self.details:
            payload["details"] = self.details
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4)

    def print(self, stream: TextIO | None = None) -> None:
        """Write the indented JSON form followed by a newline (stdout by default)."""
        out = stream if stream is not None else sys.stdout
        out.write(self.to_json() + "\n")
        out.flush()

    @classmethod
    def from_dict(cls, payload: Any) -> CNIError:
        if not isinstance(payload, dict):
            raise ValueError(f"error payload must be an object, got {type(payload).__name__}")
        code = payload.get("code", 0)
        if not isinstance(code, int) or isinstance(code, bool):
            raise ValueError(f"error code must be an integer, got {code!r}")
        return cls(code, str(payload.get("msg") or ""), str(payload.get("details") or ""))

    @classmethod
    def from_json(cls, data: bytes | str) -> CNIError:
        return cls.from_dict(json.loads(data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CNIError):
            return NotImplemented
        return (self.code, self.message, self.details) == (other.code, other.message, other.details)

    __hash__ = Exception.__hash__

    def __repr__(self) -> str:
        return f"CNIError(code={int(self.code)}, message={self.message!r}, details={self.details!r})"

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}; {self.details}"
        return self.message


def _coerce_code(code: int) -> int:
    # Plugins may use codes outside the well-known set (100+ is plugin-defined).
    try:
        return ErrorCode(code)
    except ValueError:
        return int(code)


def wrap_handler_error(exc: BaseException) -> CNIError:
    """Classify a handler failure: CNIError passes through, anything else becomes INTERNAL."""
    if isinstance(exc, CNIError):
        return exc
    return CNIError(ErrorCode.INTERNAL, str(exc))
