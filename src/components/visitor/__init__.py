"""
Visitor component - Salted visitor identity hashing.
"""

from .component import (
    VisitorHasher,
    create_visitor_hasher,
    init_salt,
)
from .models import HASH_LENGTH, SALT_BYTES, SaltInitError
from .ports import SaltStorePort

__all__ = [
    "VisitorHasher",
    "create_visitor_hasher",
    "init_salt",
    "HASH_LENGTH",
    "SALT_BYTES",
    "SaltInitError",
    "SaltStorePort",
]
