#!/usr/bin/env python3
"""Example CNI plugin built on cniskel: does nothing, reports an empty result.

Set ``"fail": "<message>"`` in the network config to make every command fail.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from cniskel import ALL, CmdArgs, CNIFuncs, plugin_main_funcs


def _conf(args: CmdArgs) -> dict[str, Any]:
    conf = json.loads(args.stdin_data)
    if conf.get("fail"):
        raise RuntimeError(str(conf["fail"]))
    return conf


def cmd_add(args: CmdArgs) -> None:
    conf = _conf(args)
    result = {"cniVersion": conf.get("cniVersion", "0.1.0"), "interfaces": [], "ips": [], "dns": {}}
    sys.stdout.write(json.dumps(result) + "\n")


def cmd_noop(args: CmdArgs) -> None:
    _conf(args)


if __name__ == "__main__":
    plugin_main_funcs(
        CNIFuncs(add=cmd_add, delete=cmd_noop, check=cmd_noop, gc=cmd_noop),
        ALL,
        "CNI plugin noop v0.1.0",
    )
