"""Broker password hashing with the ``bcrypt`` library (>=4.0).

Passwords are hashed on broker create and on reset; only the hash is stored.
"""

import bcrypt


def hash_password(plain: str) -> str:
    """Hash a plain-text password with bcrypt. Returns a utf-8 hash string."""
    hashed_bytes: bytes = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt())
    return hashed_bytes.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a bcrypt hash.

    A malformed stored hash counts as a mismatch instead of a 500.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


# Checked against when the username does not exist so that unknown users and
# wrong passwords take the same time to reject.
DUMMY_HASH: str = hash_password("not-a-real-password")
