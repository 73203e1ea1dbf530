"""
Visitor component models and errors.
"""

from __future__ import annotations

SALT_BYTES = 32
HASH_LENGTH = 16


class SaltInitError(RuntimeError):
    """
    The hash salt could not be loaded or created.

    Startup-fatal: running without a secret salt would make visitor hashes
    predictable.
    """
