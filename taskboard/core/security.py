"""
Password hashing with bcrypt.

bcrypt only ever looks at the first 72 bytes of a password. Longer
passwords are refused instead of truncated, so two long passwords that
share a prefix can never verify against each other's hash.
"""

from typing import Optional

import bcrypt

from taskboard.core.config import settings

MAX_PASSWORD_BYTES = 72


def password_fits(password: str) -> bool:
    """True when bcrypt will see the whole password."""
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a plain password.
    
    Args:
        password: Plain text password, at most MAX_PASSWORD_BYTES once UTF-8 encoded
        rounds: bcrypt cost factor, defaults to BCRYPT_ROUNDS
        
    Raises:
        ValueError: the password is too long to hash without truncation
    """
    if not password_fits(password):
        raise ValueError(f"Password is longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash. Never raises."""
    if not plain_password or not hashed_password or not password_fits(plain_password):
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("ascii"))
    except ValueError:
        # Not a bcrypt hash (UnicodeEncodeError is a ValueError too)
        return False
