"""pcli2-mcp: Model Context Protocol server over HTTP for the Physna CLI (pcli2)."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from pcli2_mcp.protocols.mcp.handler import McpHandler as McpHandler
    from pcli2_mcp.server.app import create_app as create_app

_LAZY_EXPORTS = {
    "McpHandler": "pcli2_mcp.protocols.mcp.handler",
    "create_app": "pcli2_mcp.server.app",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'pcli2_mcp' has no attribute {name!r}")
