"""
Password hashing with bcrypt.

Digests are salted, so hashing the same password twice gives different
strings; both still verify. bcrypt.checkpw compares in constant time.
"""

from functools import lru_cache

import bcrypt

DEFAULT_ROUNDS = 12

# bcrypt ignores (or rejects, depending on version) input past 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Hash a plaintext password.

    Args:
        plain: The password as typed by the user
        rounds: bcrypt work factor (log2 of the iteration count, 4..31)

    Returns:
        The bcrypt digest as a str (algorithm, cost and salt are embedded)

    Raises:
        ValueError: If the password is empty or longer than 72 bytes
    """
    if not plain:
        raise ValueError("Password must not be empty")
    encoded = plain.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must not exceed {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, digest: str) -> bool:
    """Check a plaintext password against a stored digest."""
    if not plain or not digest:
        return False
    encoded = plain.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, digest.encode("utf-8"))
    except ValueError:
        # Malformed or non-bcrypt digest
        return False


@lru_cache(maxsize=4)
def dummy_digest(rounds: int = DEFAULT_ROUNDS) -> str:
    """Digest used to spend the same time on logins for unknown emails."""
    return hash_password("not-a-real-password", rounds=rounds)
