# tx_mcp_server/tools/__init__.py
"""Tool name → module that registers it on import."""
from __future__ import annotations

from importlib import import_module
from types import ModuleType

TERMINOLOGY = "tx_mcp_server.tools.terminology"

ALL: dict[str, str] = {
    "lookup-code": TERMINOLOGY,
    "validate-code": TERMINOLOGY,
}


def load_enabled(names: list[str]) -> list[str]:
    """Register every tool in ``names``; returns them sorted.

    Raises RuntimeError on a name no module provides, before anything loads.
    """
    unknown = sorted(set(names) - set(ALL))
    if unknown:
        raise RuntimeError(f"Unknown tool(s) {unknown} in tools.yaml (allowed: {sorted(ALL)})")
    modules: dict[str, ModuleType] = {}
    for name in names:
        path = ALL[name]
        if path not in modules:
            modules[path] = import_module(path)  # @mcp.tool runs on import
    return sorted(names)
