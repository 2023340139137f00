"""Tests for ThumbnailCache."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pcli2_mcp.cache.errors import ThumbnailCacheError, ThumbnailExpiredError, ThumbnailNotFoundError
from pcli2_mcp.cache.models import ThumbnailCacheConfig
from pcli2_mcp.cache.thumbnail import ThumbnailCache, is_valid_key

PNG = b"\x89PNG\r\n\x1a\nimage-bytes"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _cache(tmp_path: Path, clock: FakeClock | None = None, ttl: float = 60.0) -> ThumbnailCache:
    config = ThumbnailCacheConfig.for_server(tmp_path / "thumbs", ttl, "localhost", 8080)
    if clock is None:
        return ThumbnailCache(config)
    return ThumbnailCache(config, clock=clock)


class TestKeys:
    def test_generated_key_shape(self, tmp_path: Path) -> None:
        key = _cache(tmp_path).generate_key("/Root/Part.stl")
        assert len(key) == 16
        assert is_valid_key(key)

    def test_same_source_yields_distinct_keys(self, tmp_path: Path) -> None:
        cache = _cache(tmp_path)
        keys = {cache.generate_key("uuid-1") for _ in range(200)}
        assert len(keys) == 200

    @pytest.mark.parametrize("key", ["", "../etc/passwd", "ABCDEF0123456789", "0123456789abcde", "0123456789abcdef0"])
    def test_invalid_keys(self, key: str) -> None:
        assert not is_valid_key(key)


class TestSaveLoad:
    def test_creates_cache_dir(self, tmp_path: Path) -> None:
        cache = _cache(tmp_path)
        assert cache.cache_dir.is_dir()

    def test_round_trip(self, tmp_path: Path) -> None:
        cache = _cache(tmp_path)
        key, url = cache.save("uuid-1", PNG)
        assert url == f"http://localhost:8080/thumbnail/{key}"
        assert cache.load(key) == PNG

    def test_writes_payload_and_sidecar(self, tmp_path: Path) -> None:
        clock = FakeClock(1000.0)
        cache = _cache(tmp_path, clock)
        key, _ = cache.save("/Root/Part.stl", PNG)
        meta = json.loads((cache.cache_dir / f"{key}.meta").read_text())
        assert meta == {"cached_at": 1_000_000, "source": "/Root/Part.stl", "content_hash": None}
        assert (cache.cache_dir / f"{key}.png").read_bytes() == PNG

    def test_repeated_saves_are_not_deduplicated(self, tmp_path: Path) -> None:
        cache = _cache(tmp_path)
        first, _ = cache.save("uuid-1", PNG)
        second, _ = cache.save("uuid-1", PNG)
        assert first != second
        assert len(list(cache.cache_dir.glob("*.png"))) == 2

    def test_missing_key(self, tmp_path: Path) -> None:
        cache = _cache(tmp_path)
        with pytest.raises(ThumbnailNotFoundError) as exc_info:
            cache.load("0123456789abcdef")
        assert exc_info.value.key == "0123456789abcdef"

    def test_malformed_key_is_not_found(self, tmp_path: Path) -> None:
        cache = _cache(tmp_path)
        with pytest.raises(ThumbnailNotFoundError):
            cache.load("../../secret")

    def test_unwritable_cache_dir(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        config = ThumbnailCacheConfig(cache_dir=blocker / "thumbs")
        with pytest.raises(ThumbnailCacheError):
            ThumbnailCache(config)

    def test_cleanup_during_save_keeps_new_entry(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        cache = _cache(tmp_path)
        original_write = Path.write_bytes

        def write_then_cleanup(self: Path, data: bytes) -> int:
            written = original_write(self, data)
            assert cache.cleanup_expired() == 0
            return written

        monkeypatch.setattr(Path, "write_bytes", write_then_cleanup)
        key, _ = cache.save("uuid-1", PNG)
        monkeypatch.undo()
        assert cache.load(key) == PNG

    def test_failed_payload_write_leaves_nothing_behind(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        cache = _cache(tmp_path)

        def fail(self: Path, data: bytes) -> int:
            raise OSError("disk full")

        monkeypatch.setattr(Path, "write_bytes", fail)
        with pytest.raises(ThumbnailCacheError, match="Failed to write thumbnail data"):
            cache.save("uuid-1", PNG)
        monkeypatch.undo()
        assert list(cache.cache_dir.iterdir()) == []


class TestExpiry:
    def test_entry_valid_at_ttl_boundary(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = _cache(tmp_path, clock, ttl=60.0)
        key, _ = cache.save("uuid-1", PNG)
        clock.now += 60.0
        assert cache.load(key) == PNG

    def test_expired_entry_is_removed(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = _cache(tmp_path, clock, ttl=60.0)
        key, _ = cache.save("uuid-1", PNG)
        clock.now += 61.0
        with pytest.raises(ThumbnailExpiredError):
            cache.load(key)
        assert not (cache.cache_dir / f"{key}.png").exists()
        assert not (cache.cache_dir / f"{key}.meta").exists()
        with pytest.raises(ThumbnailNotFoundError):
            cache.load(key)

    def test_missing_sidecar_counts_as_expired(self, tmp_path: Path) -> None:
        cache = _cache(tmp_path)
        key, _ = cache.save("uuid-1", PNG)
        (cache.cache_dir / f"{key}.meta").unlink()
        assert cache.is_expired(key)
        with pytest.raises(ThumbnailExpiredError):
            cache.load(key)

    def test_corrupt_sidecar_counts_as_expired(self, tmp_path: Path) -> None:
        cache = _cache(tmp_path)
        key, _ = cache.save("uuid-1", PNG)
        (cache.cache_dir / f"{key}.meta").write_text("{not json")
        assert cache.is_expired(key)


class TestRemove:
    def test_remove_is_idempotent(self, tmp_path: Path) -> None:
        cache = _cache(tmp_path)
        key, _ = cache.save("uuid-1", PNG)
        cache.remove(key)
        cache.remove(key)
        with pytest.raises(ThumbnailNotFoundError):
            cache.load(key)

    def test_remove_ignores_malformed_key(self, tmp_path: Path) -> None:
        _cache(tmp_path).remove("not-a-key")


class TestCleanup:
    def test_removes_only_expired_entries(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = _cache(tmp_path, clock, ttl=60.0)
        old_a, _ = cache.save("a", PNG)
        old_b, _ = cache.save("b", PNG)
        clock.now += 30.0
        fresh, _ = cache.save("c", PNG)
        clock.now += 31.0

        assert cache.cleanup_expired() == 2
        assert cache.load(fresh) == PNG
        for key in (old_a, old_b):
            with pytest.raises(ThumbnailNotFoundError):
                cache.load(key)

    def test_ignores_foreign_files(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = _cache(tmp_path, clock, ttl=1.0)
        (cache.cache_dir / "notes.txt").write_text("keep me")
        (cache.cache_dir / "not-a-key.png").write_bytes(PNG)
        clock.now += 10.0
        assert cache.cleanup_expired() == 0
        assert (cache.cache_dir / "notes.txt").exists()
        assert (cache.cache_dir / "not-a-key.png").exists()

    def test_empty_cache(self, tmp_path: Path) -> None:
        assert _cache(tmp_path).cleanup_expired() == 0
