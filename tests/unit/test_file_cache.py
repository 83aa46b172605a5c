"""Unit tests for the file-backed snapshot cache."""

import json
import os
from datetime import datetime

import pytest

from nhl_standings.storage.file_cache import (
    CacheReadError,
    CacheWriteError,
    FileCache,
    atomic_write_text,
)


@pytest.fixture
def cache(tmp_path):
    return FileCache(tmp_path / "cache")


class TestFileCache:
    def test_get_missing_entry_returns_none(self, cache):
        assert cache.get("nhl-standings") is None

    def test_put_then_get(self, cache, valid_snapshot):
        stored = cache.put("nhl-standings", valid_snapshot)

        loaded = cache.get("nhl-standings")

        assert loaded == stored
        assert loaded.data == valid_snapshot
        datetime.fromisoformat(loaded.timestamp)

    def test_entry_file_format(self, cache):
        cache.put("slot", {"standings": []}, timestamp="2025-01-15T12:00:00+00:00")

        on_disk = json.loads(cache.path_for("slot").read_text(encoding="utf-8"))

        assert on_disk == {"data": {"standings": []}, "timestamp": "2025-01-15T12:00:00+00:00"}

    def test_put_overwrites_previous_entry(self, cache):
        cache.put("slot", {"standings": [1]})
        cache.put("slot", {"standings": [2]})

        assert cache.get("slot").data == {"standings": [2]}

    def test_corrupt_entry_raises_read_error(self, cache):
        path = cache.path_for("slot")
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CacheReadError):
            cache.get("slot")

    def test_entry_without_timestamp_raises_read_error(self, cache):
        path = cache.path_for("slot")
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"data": {"standings": []}}), encoding="utf-8")

        with pytest.raises(CacheReadError):
            cache.get("slot")

    def test_unserialisable_data_raises_write_error(self, cache):
        with pytest.raises(CacheWriteError):
            cache.put("slot", {"standings": object()})

    def test_failed_write_keeps_previous_entry(self, cache, monkeypatch):
        cache.put("slot", {"standings": ["good"]}, timestamp="2025-01-15T12:00:00+00:00")

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(CacheWriteError, match="disk full"):
            cache.put("slot", {"standings": ["bad"]})
        monkeypatch.undo()

        entry = cache.get("slot")
        assert entry.data == {"standings": ["good"]}
        assert entry.timestamp == "2025-01-15T12:00:00+00:00"
        # No temporary files left behind
        assert [p.name for p in cache.cache_dir.iterdir()] == ["slot.json"]


class TestAtomicWriteText:
    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "out.json"

        atomic_write_text(target, "{}")

        assert target.read_text(encoding="utf-8") == "{}"
