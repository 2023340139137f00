"""Configuration for the HTTP server."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from pcli2_mcp import __version__
from pcli2_mcp.cache.models import DEFAULT_TTL

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080
DEFAULT_REQUEST_TIMEOUT = 30 * 60.0
MAX_REQUEST_BYTES = 1024 * 1024


class ServerConfig(BaseModel):
    """Everything ``pcli2-mcp serve`` needs to build and run the app."""

    host: str = Field(default=DEFAULT_HOST, description="Interface to bind.")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535, description="TCP port to bind.")
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        gt=0,
        description="Max seconds any HTTP request may take before a 408.",
    )
    max_request_bytes: int = Field(default=MAX_REQUEST_BYTES, gt=0, description="Max accepted /mcp body size.")
    server_name: str = Field(default="pcli2-mcp", description="Name reported by initialize.")
    server_version: str = Field(default=__version__, description="Version reported by initialize.")
    thumbnail_ttl: float = Field(default=DEFAULT_TTL, gt=0, description="Thumbnail cache entry lifetime in seconds.")
    cache_dir: Path | None = Field(default=None, description="Thumbnail cache directory (None = default).")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"
