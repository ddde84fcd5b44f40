import json
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel

from pathlike.errors import PersistenceLoadCorrupt
from pathlike.storage.base import KeyValueStore
from pathlike.storage.documents import SCHEMA_VERSION

DocumentT = TypeVar("DocumentT", bound=BaseModel)


class VersionedStore:
    """Fail-soft, schema-versioned access to a KeyValueStore.

    Reads that fail decoding, validation or the version check come back as None.
    Writes that fail are logged and reported through the return value, never raised.
    """

    def __init__(
        self, store: KeyValueStore, prefix: str = "", version: int = SCHEMA_VERSION
    ) -> None:
        self.store = store
        self.prefix = prefix
        self.version = version

    def load(self, key: str, document_type: type[DocumentT]) -> DocumentT | None:
        """Load and validate the document stored under a key.

        Args:
            key: Logical key, without prefix
            document_type: Envelope model carrying a ``version`` field

        Returns:
            The validated document, or None if nothing usable is stored
        """
        full_key = self._full_key(key)
        try:
            raw = self.store.get(full_key)
        except Exception as e:
            logger.error(f"Failed to read '{full_key}' from storage: {e}")
            return None

        if raw is None:
            return None

        try:
            return self._decode(full_key, raw, document_type)
        except PersistenceLoadCorrupt as e:
            logger.warning(f"Ignoring stored data: {e}")
            return None

    def save(self, key: str, document: BaseModel) -> bool:
        """Replace the document stored under a key. Returns False if the write failed."""
        full_key = self._full_key(key)
        try:
            self.store.set(full_key, document.model_dump_json())
        except Exception as e:
            logger.error(f"Failed to save '{full_key}': {str(e)}")
            return False
        return True

    def remove(self, key: str) -> bool:
        """Remove a key. Returns False if the store refused."""
        full_key = self._full_key(key)
        try:
            self.store.remove(full_key)
        except Exception as e:
            logger.error(f"Failed to remove '{full_key}': {str(e)}")
            return False
        return True

    def _decode(self, full_key: str, raw: str, document_type: type[DocumentT]) -> DocumentT:
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise PersistenceLoadCorrupt(f"'{full_key}' is not valid JSON", key=full_key) from e

        if not isinstance(data, dict) or data.get("version") != self.version:
            found = data.get("version") if isinstance(data, dict) else None
            raise PersistenceLoadCorrupt(
                f"'{full_key}' has schema version {found!r}, expected {self.version}",
                key=full_key,
            )

        try:
            return document_type.model_validate(data)
        except ValueError as e:
            raise PersistenceLoadCorrupt(
                f"'{full_key}' failed schema validation", key=full_key
            ) from e

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"
