"""Shared skeleton types and error helpers."""

from .errors import CNIError, ErrorCode, wrap_handler_error
from .types import CmdArgs, CNIFuncs, Handler

__all__ = [
    "CNIError",
    "CNIFuncs",
    "CmdArgs",
    "ErrorCode",
    "Handler",
    "wrap_handler_error",
]
