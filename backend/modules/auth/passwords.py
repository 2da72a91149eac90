"""
Password hashing with bcrypt.

bcrypt.checkpw compares in constant time. verify_password also burns a
check against a fixed hash when the account has none, so a login for an
unknown email costs the same as a wrong password.
"""

from functools import lru_cache
from typing import Optional

import bcrypt

BCRYPT_ROUNDS = 12
# bcrypt ignores (newer releases reject) input beyond 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


@lru_cache(maxsize=1)
def _dummy_hash() -> bytes:
    return bcrypt.hashpw(b"stockroom-timing-equalizer", bcrypt.gensalt(rounds=BCRYPT_ROUNDS))


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Check a password against a stored hash.

    Args:
        password: Candidate password
        password_hash: Stored bcrypt hash, or None for accounts without one

    Returns:
        True only if a hash exists and matches
    """
    candidate = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
    if not password_hash:
        bcrypt.checkpw(candidate, _dummy_hash())
        return False

    try:
        return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
