"""ThumbnailCache: disk-backed PNG store with time-based expiry.

Thumbnails are written to ``<cache_dir>/<key>.png`` with a JSON sidecar
``<cache_dir>/<key>.meta`` recording when the entry was created.  Entries are
served by key over HTTP so large images need not be embedded in RPC
responses.

Keys are derived from the source identifier plus a high-resolution timestamp,
not from the content: saving the same image twice yields two entries.
Expiry is checked lazily on :meth:`ThumbnailCache.load` and in bulk by
:meth:`ThumbnailCache.cleanup_expired`; there is no background sweeper.
"""

from __future__ import annotations

import hashlib
import itertools
import logging
import re
import time
from typing import TYPE_CHECKING

from pydantic import ValidationError

from pcli2_mcp.cache.errors import ThumbnailCacheError, ThumbnailExpiredError, ThumbnailNotFoundError
from pcli2_mcp.cache.models import ThumbnailCacheConfig, ThumbnailMetadata

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

logger = logging.getLogger(__name__)

THUMBNAIL_EXTENSION = "png"
METADATA_EXTENSION = "meta"

_KEY_PATTERN = re.compile(r"[0-9a-f]{16}")
_sequence = itertools.count()


def is_valid_key(key: str) -> bool:
    return _KEY_PATTERN.fullmatch(key) is not None


class ThumbnailCache:
    """Key → PNG bytes store scoped to one directory.

    Usage::

        cache = ThumbnailCache(ThumbnailCacheConfig.for_server(path, ttl, "localhost", 8080))
        key, url = cache.save("/Root/Part.stl", png_bytes)
        data = cache.load(key)

    All methods do blocking file I/O; async callers should run them in a
    worker thread.
    """

    def __init__(
        self,
        config: ThumbnailCacheConfig | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or ThumbnailCacheConfig()
        self._clock = clock
        self._ensure_cache_dir()

    @property
    def config(self) -> ThumbnailCacheConfig:
        return self._config

    @property
    def cache_dir(self) -> Path:
        return self._config.cache_dir

    @property
    def ttl(self) -> float:
        return self._config.ttl

    def generate_key(self, source: str) -> str:
        """Return a new 16-hex-digit key for *source*; never repeats within a process."""
        hasher = hashlib.blake2b(digest_size=8)
        hasher.update(source.encode())
        hasher.update(str(time.time_ns()).encode())
        hasher.update(str(next(_sequence)).encode())
        return hasher.hexdigest()

    def save(self, source: str, data: bytes) -> tuple[str, str]:
        """Store *data* and return ``(key, url)``.

        The sidecar is written before the payload, and the payload is moved
        into place with a rename, so a concurrent cleanup never sees a
        payload without its metadata.
        """
        key = self.generate_key(source)
        payload_path = self._payload_path(key)
        meta_path = self._metadata_path(key)
        partial_path = payload_path.with_name(f"{payload_path.name}.partial")
        metadata = ThumbnailMetadata(cached_at=self._now_ms(), source=source)

        try:
            meta_path.write_text(metadata.model_dump_json(indent=2))
        except OSError as exc:
            msg = f"Failed to write metadata file {meta_path}: {exc}"
            raise ThumbnailCacheError(msg) from exc
        try:
            partial_path.write_bytes(data)
            partial_path.replace(payload_path)
        except OSError as exc:
            partial_path.unlink(missing_ok=True)
            meta_path.unlink(missing_ok=True)
            msg = f"Failed to write thumbnail data to {payload_path}: {exc}"
            raise ThumbnailCacheError(msg) from exc

        url = f"{self._config.base_url}/{key}"
        logger.info("Cached thumbnail for '%s' at %s (expires in %ss)", source, url, self._config.ttl)
        return key, url

    def load(self, key: str) -> bytes:
        """Return the payload for *key*.

        Raises :class:`ThumbnailNotFoundError` if absent, or
        :class:`ThumbnailExpiredError` (after deleting the entry) if stale.
        """
        if not is_valid_key(key):
            raise ThumbnailNotFoundError(key)

        payload_path = self._payload_path(key)
        if not payload_path.is_file():
            raise ThumbnailNotFoundError(key)

        if self.is_expired(key):
            try:
                self.remove(key)
            except ThumbnailCacheError as exc:
                logger.warning("Failed to remove expired thumbnail %s: %s", key, exc)
            raise ThumbnailExpiredError(key)

        try:
            data = payload_path.read_bytes()
        except FileNotFoundError:
            raise ThumbnailNotFoundError(key) from None
        except OSError as exc:
            msg = f"Failed to read thumbnail data from {payload_path}: {exc}"
            raise ThumbnailCacheError(msg) from exc

        logger.debug("Loaded thumbnail from cache: %s", key)
        return data

    def is_expired(self, key: str) -> bool:
        """An entry is expired when its age exceeds the TTL or its sidecar is missing/corrupt."""
        try:
            raw = self._metadata_path(key).read_text()
            metadata = ThumbnailMetadata.model_validate_json(raw)
        except (OSError, ValidationError):
            return True
        age_ms = self._now_ms() - metadata.cached_at
        return age_ms > int(self._config.ttl * 1000)

    def remove(self, key: str) -> None:
        """Delete the payload and sidecar for *key*; a missing entry is not an error."""
        if not is_valid_key(key):
            return
        for path in (self._payload_path(key), self._metadata_path(key)):
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                msg = f"Failed to remove {path}: {exc}"
                raise ThumbnailCacheError(msg) from exc
        logger.debug("Removed thumbnail from cache: %s", key)

    def cleanup_expired(self) -> int:
        """Remove every expired entry in one pass and return how many were removed."""
        try:
            entries = list(self._config.cache_dir.iterdir())
        except OSError as exc:
            msg = f"Failed to read cache directory {self._config.cache_dir}: {exc}"
            raise ThumbnailCacheError(msg) from exc

        removed = 0
        for path in entries:
            if path.suffix != f".{THUMBNAIL_EXTENSION}" or not is_valid_key(path.stem):
                continue
            key = path.stem
            if not self.is_expired(key):
                continue
            try:
                self.remove(key)
            except ThumbnailCacheError as exc:
                logger.warning("Failed to remove expired thumbnail %s: %s", key, exc)
                continue
            removed += 1

        if removed:
            logger.info("Cleaned up %d expired thumbnail(s)", removed)
        return removed

    def _ensure_cache_dir(self) -> None:
        try:
            self._config.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Failed to create thumbnail cache directory {self._config.cache_dir}: {exc}"
            raise ThumbnailCacheError(msg) from exc
        logger.debug("Thumbnail cache directory ready: %s", self._config.cache_dir)

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _payload_path(self, key: str) -> Path:
        return self._config.cache_dir / f"{key}.{THUMBNAIL_EXTENSION}"

    def _metadata_path(self, key: str) -> Path:
        return self._config.cache_dir / f"{key}.{METADATA_EXTENSION}"
