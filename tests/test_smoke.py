"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import pcli2_mcp

    assert pcli2_mcp.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from pcli2_mcp.cli import main

    assert callable(main)


def test_layer_imports() -> None:
    from pcli2_mcp.cache import ThumbnailCache, ThumbnailCacheConfig
    from pcli2_mcp.protocols import ToolCallError
    from pcli2_mcp.protocols.mcp import McpHandler, build_client_config
    from pcli2_mcp.runtime.process import ProcessConfig, ProcessRunner
    from pcli2_mcp.server import ServerConfig, create_app
    from pcli2_mcp.tools import TOOLS, ToolDispatcher

    assert ThumbnailCache is not None
    assert ThumbnailCacheConfig is not None
    assert ToolCallError is not None
    assert McpHandler is not None
    assert build_client_config is not None
    assert ProcessConfig is not None
    assert ProcessRunner is not None
    assert ServerConfig is not None
    assert create_app is not None
    assert len(TOOLS) == 27
    assert ToolDispatcher is not None


def test_lazy_import_from_package() -> None:
    import pcli2_mcp

    assert pcli2_mcp.McpHandler is not None
    assert pcli2_mcp.create_app is not None
