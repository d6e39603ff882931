"""Key-value cache protocol for the local account mirror."""

from typing import Protocol, Optional


class CacheRepository(Protocol):
    """Interface for a durable local key-value slot."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        ...

    def put(self, key: str, value: str) -> None:
        """Insert or overwrite a value."""
        ...
