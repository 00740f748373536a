"""Key-value stores for persisted editor state."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Protocol

from tonepicker.logging_utils import get_logger

logger = get_logger(__name__)


class StateStore(Protocol):
    """Minimal persistence interface used by the tone session."""

    def load(self, key: str) -> Any | None:
        ...

    def save(self, key: str, value: Any) -> None:
        ...


class MemoryStore:
    """Process-local store, mostly useful for tests."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def load(self, key: str) -> Any | None:
        return self._data.get(key)

    def save(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileStore:
    """Loads and persists state as a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._data = self._load()

    def _load(self) -> dict[str, Any]:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as file:
                data = json.load(file)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self) -> None:
        """Write to a sibling temp file, then swap it in."""
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                json.dump(self._data, file, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def load(self, key: str) -> Any | None:
        with self._lock:
            return self._data.get(key)

    def save(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value
            self._write()
