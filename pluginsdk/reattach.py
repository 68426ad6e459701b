"""Information a host needs to attach to an already running plugin process."""

from __future__ import annotations

import json
import re
import sys
from dataclasses import dataclass, field
from typing import Any

ENV_REATTACH = "WP_REATTACH_PLUGINS"

_GO_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_GO_ESCAPE_RE = re.compile("[<>&\u2028\u2029]")


@dataclass
class ReattachConfigAddr:
    """A network address in a JSON-friendly form."""

    network: str = ""
    string: str = ""


@dataclass
class ReattachConfig:
    """Protocol, process and address details for attaching to a plugin."""

    protocol: str = ""
    protocol_version: int = 0
    pid: int = 0
    test: bool = False
    addr: ReattachConfigAddr = field(default_factory=ReattachConfigAddr)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form with its wire field names."""
        return {
            "Protocol": self.protocol,
            "ProtocolVersion": self.protocol_version,
            "Pid": self.pid,
            "Test": self.test,
            "Addr": {"Network": self.addr.network, "String": self.addr.string},
        }


def reattach_json(plugin_addr: str, config: ReattachConfig) -> str:
    """Encode ``{plugin_addr: config}`` as compact JSON."""
    encoded = json.dumps(
        {plugin_addr: config.to_dict()}, ensure_ascii=False, separators=(",", ":")
    )
    return _GO_ESCAPE_RE.sub(lambda m: _GO_ESCAPES[m.group(0)], encoded)


def attach_instructions(
    plugin_addr: str, config: ReattachConfig, platform: str | None = None
) -> str:
    """Return the text telling the user how to set the reattach variable."""
    platform = sys.platform if platform is None else platform
    value = reattach_json(plugin_addr, config)

    lines = [f"Plugin started, to attach Waypoint set the {ENV_REATTACH} env var:\n\n"]
    if platform in ("windows", "win32"):
        lines.append(f'\tCommand Prompt:\tset "{ENV_REATTACH}={value}"\n')
        powershell = value.replace("'", "''")
        lines.append(f"\tPowerShell:\t$env:{ENV_REATTACH}='{powershell}'\n")
    elif platform in ("linux", "darwin"):
        quoted = value.replace("'", "'\"'\"'")
        lines.append(f"\t{ENV_REATTACH}='{quoted}'\n")
    else:
        lines.append(value + "\n")
    lines.append("\n")
    return "".join(lines)