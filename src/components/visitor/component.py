"""
Visitor component - Pseudonymous visitor identity.

Derives stable, non-reversible identifiers from (client IP, user agent)
using a secret salt that is created once and persisted.

Invariants:
- Same salt and inputs always yield the same identifier
- Identifiers are fixed width (16 hex chars)
- Raw IPs are never returned or stored
- The salt is never regenerated once persisted
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets

from .models import HASH_LENGTH, SALT_BYTES, SaltInitError
from .ports import SaltStorePort

logger = logging.getLogger(__name__)


class VisitorHasher:
    """
    Salted one-way hasher for visitor identity.

    Holds the salt read-only; safe to share across request threads.
    """

    def __init__(self, salt: bytes) -> None:
        if not salt:
            raise ValueError("Visitor hasher requires a non-empty salt")
        self._salt = bytes(salt)

    def _digest(self, message: str) -> str:
        mac = hmac.new(self._salt, message.encode("utf-8"), hashlib.sha256)
        return mac.hexdigest()[:HASH_LENGTH]

    def hash_ip(self, ip: str) -> str:
        """Hash a client IP to a 16-character token."""
        return self._digest(ip)

    def generate_visitor_id(self, ip: str, user_agent: str) -> str:
        """
        Derive the visitor id for a device.

        The user agent is mixed in so two devices behind one IP stay
        distinct. A browser change on the same device yields a new visitor.
        """
        return self._digest(f"{ip}\x00{user_agent}")


def init_salt(store: SaltStorePort) -> bytes:
    """
    Load the persisted salt, creating and persisting one on first run.

    Raises:
        SaltInitError: If the salt cannot be read, generated or stored.
    """
    try:
        salt = store.get_salt()
    except Exception as e:
        raise SaltInitError(f"Failed to read hash salt: {e}") from e

    if salt:
        logger.info("Loaded existing hash salt")
        return salt

    try:
        salt = secrets.token_bytes(SALT_BYTES)
    except Exception as e:
        raise SaltInitError(f"Failed to generate hash salt: {e}") from e

    try:
        store.set_salt(salt)
    except Exception as e:
        # Another process may have stored its salt first
        try:
            stored = store.get_salt()
        except Exception:
            raise SaltInitError(f"Failed to persist hash salt: {e}") from e
        if stored:
            logger.info("Hash salt created concurrently; using the stored one")
            return stored
        raise SaltInitError(f"Failed to persist hash salt: {e}") from e

    logger.info("Generated and stored new hash salt")
    return salt


def create_visitor_hasher(store: SaltStorePort) -> VisitorHasher:
    """Initialize the salt and build a hasher around it."""
    return VisitorHasher(init_salt(store))
