"""Error types for the thumbnail cache."""


class ThumbnailCacheError(Exception):
    """Base error for all thumbnail cache failures (including disk I/O)."""


class ThumbnailNotFoundError(ThumbnailCacheError):
    """No cached payload exists for the requested key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Thumbnail not found: {key}")


class ThumbnailExpiredError(ThumbnailCacheError):
    """The entry outlived its TTL (or its metadata was unreadable) and was removed."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Thumbnail expired and removed: {key}")
