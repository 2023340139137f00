"""Tool layer: the pcli2 tool catalog, argument validation and dispatch."""

from pcli2_mcp.tools.builder import build_args
from pcli2_mcp.tools.catalog import TOOLS, build_catalog
from pcli2_mcp.tools.dispatcher import ToolDispatcher, text_content
from pcli2_mcp.tools.schema import (
    Param,
    ParamKind,
    ToolArgumentError,
    ToolKind,
    ToolSpec,
    validate_arguments,
)

__all__ = [
    "TOOLS",
    "Param",
    "ParamKind",
    "ToolArgumentError",
    "ToolDispatcher",
    "ToolKind",
    "ToolSpec",
    "build_args",
    "build_catalog",
    "text_content",
    "validate_arguments",
]
