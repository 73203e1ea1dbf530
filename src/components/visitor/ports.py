"""
Visitor component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class SaltStorePort(Protocol):
    """Persistence for the process-wide hash salt."""

    def get_salt(self) -> bytes | None:
        """Return the persisted salt, or None if none has been stored yet."""
        ...

    def set_salt(self, salt: bytes) -> None:
        """Persist the salt. Must be durable before returning."""
        ...
