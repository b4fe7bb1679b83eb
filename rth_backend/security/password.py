"""
Password hashing and verification utilities using bcrypt.

This module provides salted password hashing and verification for the
credential store. Both ``$2a$`` and ``$2b$`` bcrypt hashes verify.
"""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# bcrypt only looks at the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _truncate(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a plaintext password with a fresh salt.

    Args:
        password: The plaintext password to hash

    Returns:
        The hashed password as a string

    Example:
        >>> hashed = hash_password("mysecretpassword")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(_truncate(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored hash.

    Args:
        plain_password: The plaintext password to verify
        hashed_password: The stored hash to verify against

    Returns:
        True if the password matches, False otherwise (including unreadable hashes)

    Example:
        >>> hashed = hash_password("mysecretpassword")
        >>> verify_password("mysecretpassword", hashed)
        True
        >>> verify_password("wrongpassword", hashed)
        False
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(_truncate(plain_password), hashed_password)
    except ValueError:
        logger.warning("Stored password hash could not be identified")
        return False
