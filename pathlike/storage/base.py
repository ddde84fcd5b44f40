from typing import Protocol


class KeyValueStore(Protocol):
    """Protocol for durable string key-value storage scoped to one origin."""

    def get(self, key: str) -> str | None:
        """Get the value stored under a key, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Remove a key. Removing a missing key is not an error."""
        ...
