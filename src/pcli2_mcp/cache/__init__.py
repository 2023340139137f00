"""Thumbnail cache: on-disk PNG storage with TTL expiry."""

from pcli2_mcp.cache.errors import ThumbnailCacheError, ThumbnailExpiredError, ThumbnailNotFoundError
from pcli2_mcp.cache.models import ThumbnailCacheConfig, ThumbnailMetadata, default_cache_dir
from pcli2_mcp.cache.thumbnail import ThumbnailCache

__all__ = [
    "ThumbnailCache",
    "ThumbnailCacheConfig",
    "ThumbnailCacheError",
    "ThumbnailExpiredError",
    "ThumbnailMetadata",
    "ThumbnailNotFoundError",
    "default_cache_dir",
]
