"""Data models for the thumbnail cache."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_TTL = 24 * 60 * 60.0
CACHE_DIR_NAME = ".pcli2-mcp"


def default_cache_dir() -> Path:
    """Return ``~/.pcli2-mcp/thumbnails``."""
    return Path.home() / CACHE_DIR_NAME / "thumbnails"


class ThumbnailCacheConfig(BaseModel):
    """Configuration for a :class:`~pcli2_mcp.cache.thumbnail.ThumbnailCache`."""

    cache_dir: Path = Field(default_factory=default_cache_dir, description="Directory holding cached files.")
    ttl: float = Field(default=DEFAULT_TTL, gt=0, description="Entry lifetime in seconds.")
    base_url: str = Field(
        default="http://localhost:8080/thumbnail",
        description="URL prefix under which cached thumbnails are served.",
    )

    @classmethod
    def for_server(cls, cache_dir: Path, ttl: float, host: str, port: int) -> ThumbnailCacheConfig:
        return cls(cache_dir=cache_dir, ttl=ttl, base_url=f"http://{host}:{port}/thumbnail")


class ThumbnailMetadata(BaseModel):
    """Sidecar stored next to each cached thumbnail as ``<key>.meta``."""

    cached_at: int = Field(..., description="Creation time as Unix milliseconds.")
    source: str = Field(..., description="Asset UUID or path the thumbnail was generated for.")
    content_hash: str | None = Field(default=None, description="Reserved; entries are not deduplicated.")
