"""Key/value storage engines backing the workout repository.

Two engines share the same three-method surface:

- ``JsonFileStore`` writes one JSON document per key under a data directory.
  Writes go to a temp file first and are swapped in with ``os.replace`` so a
  crash mid-write never leaves a truncated record behind.
- ``MemoryStore`` keeps everything in a dict; used by tests and ephemeral
  processes.

A value that exists but cannot be decoded is treated as absent (and logged);
I/O failures are raised as ``PersistenceError``.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import re
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from gymbaazi.workouts.errors import PersistenceError

logger = logging.getLogger("gymbaazi.storage")

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class KeyValueStore(ABC):
    """Minimal JSON document store keyed by string."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the decoded value for ``key``, or None when absent or corrupt."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Persist ``value`` (JSON-serializable) under ``key``."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""

    def keys(self) -> list[str]:
        return []


class MemoryStore(KeyValueStore):
    """In-process store.  Values are round-tripped through JSON on write."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(key, f"value is not JSON-serializable: {exc}") from exc
        with self._lock:
            self._data[key] = encoded

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._data)


class JsonFileStore(KeyValueStore):
    """One ``<key>.json`` file per record under ``root``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self._lock = threading.Lock()
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(str(self.root), f"cannot create data directory: {exc}") from exc

    def _path_for(self, key: str) -> Path:
        return self.root / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> Any | None:
        path = self._path_for(key)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PersistenceError(key, f"read failed: {exc}") from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring corrupt record %s (%s): %s", key, path, exc)
            return None

    def set(self, key: str, value: Any) -> None:
        try:
            encoded = json.dumps(value, indent=2, sort_keys=True)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(key, f"value is not JSON-serializable: {exc}") from exc

        path = self._path_for(key)
        with self._lock:
            tmp_name = None
            try:
                fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".tmp-", suffix=".json")
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(encoded)
                os.replace(tmp_name, path)
            except OSError as exc:
                if tmp_name is not None:
                    with contextlib.suppress(OSError):
                        os.unlink(tmp_name)
                raise PersistenceError(key, f"write failed: {exc}") from exc
        logger.debug("Wrote %s (%d bytes)", path.name, len(encoded))

    def delete(self, key: str) -> None:
        with self._lock:
            try:
                self._path_for(key).unlink()
            except FileNotFoundError:
                return
            except OSError as exc:
                raise PersistenceError(key, f"delete failed: {exc}") from exc

    def keys(self) -> list[str]:
        return sorted(p.stem for p in self.root.glob("*.json") if not p.name.startswith(".tmp-"))
