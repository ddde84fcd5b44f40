import json
import os
import tempfile
from pathlib import Path

from loguru import logger

from pathlike.errors import PersistenceWriteFailed
from pathlike.storage.base import KeyValueStore


class LocalKeyValueStore(KeyValueStore):
    """Local key-value store that saves all keys to a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalKeyValueStore.

        Args:
            filepath: Path to store file. If provided and exists, will auto-load.
                     If provided and doesn't exist, it is created on the first write.
                     If not provided, keeps values in memory only.
                     An unreadable or malformed file is treated as an empty store.
        """
        self._filepath = str(filepath) if filepath else None
        self._entries: dict[str, str] = {}

        if self._filepath and Path(self._filepath).exists():
            self._entries = self._read(self._filepath)

    def get(self, key: str) -> str | None:
        """Get the value stored under a key, or None."""
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value and write the file through."""
        self._entries[key] = value
        self._flush(key)

    def remove(self, key: str) -> None:
        """Remove a key and write the file through."""
        if self._entries.pop(key, None) is not None:
            self._flush(key)

    def keys(self) -> list[str]:
        """Get all stored keys."""
        return list(self._entries.keys())

    @staticmethod
    def _read(filepath: str) -> dict[str, str]:
        try:
            with open(filepath, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable store file {filepath}: {e}")
            return {}

        entries = data.get("entries") if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            logger.warning(f"Ignoring store file {filepath}: no entries mapping")
            return {}

        return {key: value for key, value in entries.items() if isinstance(value, str)}

    def _flush(self, key: str) -> None:
        if not self._filepath:
            return

        # Write a sibling temp file and swap it in, so readers never see a partial file
        path = Path(self._filepath)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                json.dump({"entries": self._entries}, f)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceWriteFailed(f"Failed to write {path}: {e}", key=key) from e
