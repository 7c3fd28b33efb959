"""Device-local key-value storage."""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

AUTH_TOKEN_KEY = "authToken"
USER_DATA_KEY = "userData"
LOCATION_KEY = "userLocationData"
SELECTED_CITY_KEY = "selectedCity"

_logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Interface for string key-value persistence."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored string for a key, if present."""

    async def set_item(self, key: str, value: str) -> None:
        """Store a string under a key."""

    async def remove_item(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class JsonFileStorage(KeyValueStorage):
    """Key-value storage persisted as a single JSON object on disk."""

    path: Path
    _entries: dict[str, str] | None = field(default=None, init=False, repr=False)
    _write_lock: asyncio.Lock = field(
        default_factory=asyncio.Lock, init=False, repr=False
    )

    @classmethod
    def create(cls, path: str) -> "JsonFileStorage":
        """Create storage backed by the given file path."""
        return cls(path=Path(path).expanduser())

    async def get_item(self, key: str) -> str | None:
        """Return the stored string for a key."""
        entries = await asyncio.to_thread(self._load)
        return entries.get(key)

    async def set_item(self, key: str, value: str) -> None:
        """Store a value and flush the file."""
        async with self._write_lock:
            entries = await asyncio.to_thread(self._load)
            entries[key] = value
            await asyncio.to_thread(self._flush, dict(entries))

    async def remove_item(self, key: str) -> None:
        """Remove a key and flush the file."""
        async with self._write_lock:
            entries = await asyncio.to_thread(self._load)
            if entries.pop(key, None) is not None:
                await asyncio.to_thread(self._flush, dict(entries))

    def _load(self) -> dict[str, str]:
        if self._entries is not None:
            return self._entries
        entries: dict[str, str] = {}
        if self.path.exists():
            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                _logger.warning("Ignoring unreadable storage file %s", self.path)
                raw = {}
            if isinstance(raw, dict):
                entries = {str(k): str(v) for k, v in raw.items()}
        self._entries = entries
        return entries

    def _flush(self, entries: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(entries, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)
