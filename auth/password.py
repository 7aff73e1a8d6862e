"""
Password hashing and verification.

Passwords are stored as a single unsalted SHA-256 hex digest so that
rows written by the existing site keep verifying.  This is a weak
scheme: moving to a salted, memory-hard KDF (argon2/scrypt) needs a
migration of the ``users.password`` column.
"""

from __future__ import annotations

import hashlib
import hmac


def _encode(password: str) -> bytes:
    """UTF-8 bytes of ``password``; lone surrogates become U+FFFD."""
    return password.encode("utf-16", "surrogatepass").decode("utf-16", "replace").encode("utf-8")


def hash_password(password: str) -> str:
    """Return the 64-char hex SHA-256 digest of ``password``."""
    return hashlib.sha256(_encode(password)).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a stored digest."""
    try:
        return hmac.compare_digest(hash_password(password), password_hash or "")
    except (ValueError, TypeError):
        return False
