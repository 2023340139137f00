"""HTTP server: starlette app, middleware and configuration."""

from pcli2_mcp.server.app import build_cache, build_handler, create_app, run_server
from pcli2_mcp.server.models import ServerConfig

__all__ = [
    "ServerConfig",
    "build_cache",
    "build_handler",
    "create_app",
    "run_server",
]
