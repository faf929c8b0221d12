import os
import hmac
import hashlib
from typing import Callable

import bcrypt


RECOVERY_KEY_PREFIX = "RK-"
RECOVERY_KEY_BYTES = 3


def newkey(n: int) -> str:
    """Generate a cryptographically secure random key."""
    return os.urandom(n).hex()


def new_sk() -> str:
    """Generate a new secret key."""
    return f"sk-{newkey(32)}"


def new_recovery_key(random_bytes: Callable[[int], bytes] = os.urandom) -> str:
    """
    Generate an emergency recovery key of the form RK-XXXXXX.

    Args:
        random_bytes: Secure byte source, called once for 3 bytes

    Returns:
        The key with its 6 hex characters upper-cased
    """
    suffix = random_bytes(RECOVERY_KEY_BYTES).hex().upper()
    return f"{RECOVERY_KEY_PREFIX}{suffix}"


def _prepare_key_for_bcrypt(key: str) -> bytes:
    """
    Prepare a key for bcrypt hashing.
    Bcrypt has a 72 byte limit, so we hash longer keys with SHA256 first.
    """
    key_bytes = key.encode('utf-8')
    if len(key_bytes) > 72:
        return hashlib.sha256(key_bytes).hexdigest().encode('utf-8')
    return key_bytes


def hash_key(key: str) -> str:
    """
    Hash a secret key using bcrypt.

    Args:
        key: The plain text key to hash

    Returns:
        The bcrypt hash as a string
    """
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(_prepare_key_for_bcrypt(key), salt)
    return hashed.decode('utf-8')


def verify_key(plain_key: str, hashed_key: str) -> bool:
    """Verify a key against its bcrypt hash."""
    try:
        key_bytes = _prepare_key_for_bcrypt(plain_key)
        return bcrypt.checkpw(key_bytes, hashed_key.encode('utf-8'))
    except (ValueError, TypeError):
        return False


def constant_time_compare(a: str, b: str) -> bool:
    """
    Perform a constant-time string comparison to prevent timing attacks.

    Args:
        a: First string to compare
        b: Second string to compare

    Returns:
        True if strings are equal, False otherwise
    """
    return hmac.compare_digest(a.encode('utf-8'), b.encode('utf-8'))
