"""Types shared by the plugin skeleton."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CmdArgs:
    """All arguments passed to a plugin via environment variables and stdin."""

    container_id: str = ""
    netns: str = ""
    if_name: str = ""
    args: str = ""
    path: str = ""
    netns_override: str = ""
    stdin_data: bytes = b""

    @property
    def netns_override_enabled(self) -> bool:
        return self.netns_override.upper() == "TRUE" or self.netns_override == "1"

    def path_list(self) -> list[str]:
        """Plugin search directories from CNI_PATH."""
        return [p for p in self.path.split(os.pathsep) if p]

    def args_dict(self) -> dict[str, str]:
        """Parse CNI_ARGS (``K1=V1;K2=V2``) into a dict."""
        out: dict[str, str] = {}
        if not self.args:
            return out
        for pair in self.args.split(";"):
            key, sep, value = pair.partition("=")
            if not sep or not key:
                raise ValueError(f"ARGS: invalid pair {pair!r}")
            out[key] = value
        return out


Handler = Callable[[CmdArgs], None]


@dataclass(slots=True)
class CNIFuncs:
    """Callbacks invoked for each CNI command. Failures are signalled by raising."""

    add: Handler | None = None
    delete: Handler | None = None
    check: Handler | None = None
    gc: Handler | None = None
