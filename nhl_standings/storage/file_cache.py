# nhl_standings/storage/file_cache.py
import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger
from pydantic import ValidationError

from nhl_standings.models.acquisition import CacheEntry


class CacheWriteError(Exception):
    """Raised when a cache entry could not be persisted."""

    pass


class CacheReadError(Exception):
    """Raised when a cache entry exists but cannot be read back."""

    pass


def atomic_write_text(path: Union[str, Path], content: str) -> None:
    """Writes content so readers only ever see the old or the new file.

    The text goes to a temporary file in the target directory which then
    replaces the target. On failure the temporary file is removed and the
    previous file is left as it was.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class FileCache:
    """One JSON file per cache slot under a directory."""

    def __init__(self, cache_dir: Union[str, Path]):
        self.cache_dir = Path(cache_dir)

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    def put(self, key: str, data: Dict[str, Any], timestamp: Optional[str] = None) -> CacheEntry:
        """Stores data under key, replacing the previous entry atomically.

        Raises:
            CacheWriteError: if the entry could not be serialised or written.
        """
        entry = CacheEntry(
            data=data,
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        )
        path = self.path_for(key)
        try:
            content = json.dumps(entry.model_dump(), indent=2, ensure_ascii=False)
            atomic_write_text(path, content)
        except (OSError, TypeError, ValueError) as e:
            raise CacheWriteError(f"Failed to write cache entry {path}: {e}") from e
        logger.debug(f"Cached entry '{key}' at {path}")
        return entry

    def get(self, key: str) -> Optional[CacheEntry]:
        """Returns the entry stored under key, or None when there is none.

        Raises:
            CacheReadError: if the file exists but is unreadable or malformed.
        """
        path = self.path_for(key)
        if not path.exists():
            logger.debug(f"No cache entry at {path}")
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return CacheEntry.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise CacheReadError(f"Invalid cache entry at {path}: {e}") from e
