"""Abstract repository interface (port) for durable per-user state."""

from abc import ABC, abstractmethod


class UserStateRepository(ABC):
    """Port for per-user key/value storage.

    Values are opaque strings (serialized JSON written by the caller) so a
    corrupted payload survives storage unchanged and is detected on read.
    """

    @abstractmethod
    async def get(self, user_id: str, key: str) -> str | None:
        """Return the stored value, or None when the key was never written."""
        ...

    @abstractmethod
    async def set(self, user_id: str, key: str, value: str) -> None:
        """Create or overwrite the value for ``key``."""
        ...

    @abstractmethod
    async def delete(self, user_id: str, key: str) -> bool:
        """Remove a key. Returns True if it existed."""
        ...
