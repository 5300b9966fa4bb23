"""Disk-backed TTL cache for catalog responses.

Each key is stored as ``<sanitized key>.cache`` holding
``{"value": ..., "timestamp": <epoch seconds>, "ttl": <seconds>}``.
Reads drop expired or unreadable entries.  Writes are best-effort; failures
are logged.
"""

from __future__ import annotations

import json
import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger("gymbaazi.catalog.cache")

_SUFFIX = ".cache"


# Convenience keys
def body_part_key(body_part: str) -> str:
    return f"bodypart_{body_part.lower()}"


def exercise_key(exercise_id: str) -> str:
    return f"exercise_{exercise_id}"


BODY_PART_COUNTS_KEY = "bodypart_counts"
MUSCLES_KEY = "muscles_list"
EQUIPMENTS_KEY = "equipments_list"
BODY_PARTS_KEY = "bodyparts_list"


@dataclass
class CacheStats:
    file_count: int
    total_size: int

    @property
    def formatted_size(self) -> str:
        size = float(self.total_size)
        for unit in ("bytes", "KB", "MB", "GB"):
            if size < 1024 or unit == "GB":
                return f"{size:.0f} {unit}" if unit == "bytes" else f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} GB"


class DiskCache:
    """JSON-file cache with per-entry TTL.

    Args:
        directory: Folder holding cache files; created on demand.
        clock:     Wall-clock source in epoch seconds, injectable for tests.
    """

    def __init__(self, directory: str | Path, clock: Callable[[], float] = time.time) -> None:
        self.directory = Path(directory)
        self._clock = clock
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Could not create cache directory %s: %s", self.directory, exc)

    def _path_for(self, key: str) -> Path:
        sanitized = key.replace("/", "_").replace(" ", "_")
        return self.directory / f"{sanitized}{_SUFFIX}"

    def _remove(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove cache file %s: %s", path, exc)

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing, expired or corrupt."""
        path = self._path_for(key)
        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
            timestamp = float(entry["timestamp"])
            ttl = float(entry["ttl"])
            value = entry["value"]
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Dropping corrupt cache entry %s: %s", key, exc)
            self._remove(path)
            return None

        age = self._clock() - timestamp
        if age >= ttl:
            self._remove(path)
            return None
        logger.debug("Cache hit: %s (age %ds)", key, int(age))
        return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        entry = {"value": value, "timestamp": self._clock(), "ttl": ttl}
        try:
            self._ensure_directory()
            self._path_for(key).write_text(json.dumps(entry), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)
            return
        logger.debug("Cache set: %s (ttl %ds)", key, int(ttl))

    def invalidate(self, key: str) -> None:
        self._remove(self._path_for(key))

    def invalidate_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with ``prefix``.  Returns the count."""
        if not self.directory.exists():
            return 0
        removed = 0
        for path in self.directory.glob(f"*{_SUFFIX}"):
            if path.name.startswith(prefix):
                self._remove(path)
                removed += 1
        return removed

    def invalidate_all(self) -> None:
        shutil.rmtree(self.directory, ignore_errors=True)
        self._ensure_directory()
        logger.info("Catalog cache cleared")

    def cleanup_expired(self) -> int:
        """Delete expired entries.  Returns how many were removed."""
        if not self.directory.exists():
            return 0
        now = self._clock()
        removed = 0
        for path in self.directory.glob(f"*{_SUFFIX}"):
            try:
                entry = json.loads(path.read_text(encoding="utf-8"))
                expired = now - float(entry["timestamp"]) > float(entry["ttl"])
            except (OSError, ValueError, KeyError, TypeError):
                continue
            if expired:
                self._remove(path)
                removed += 1
        if removed:
            logger.info("Cache cleanup removed %d expired entries", removed)
        return removed

    def stats(self) -> CacheStats:
        if not self.directory.exists():
            return CacheStats(file_count=0, total_size=0)
        files = [p for p in self.directory.iterdir() if p.is_file()]
        return CacheStats(file_count=len(files), total_size=sum(p.stat().st_size for p in files))
