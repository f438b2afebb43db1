"""
Password Hashing

bcrypt-based one-way hashing and verification of plaintext passwords.
"""
import asyncio
import logging
import bcrypt
from folio.modules.users.exceptions import HashingFailed, InvalidHashFormat

logger = logging.getLogger("folio.users.passwords")

DEFAULT_ROUNDS = 10
MAX_PASSWORD_BYTES = 72
"""bcrypt only looks at the first 72 bytes of input."""


def password_fits(password: str) -> bool:
    """True if the password is within bcrypt's input limit."""
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Generate a salted bcrypt hash of a password.

    Raises HashingFailed if the salt source or the backend fails.
    """
    if not password_fits(password):
        raise HashingFailed(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    except (OSError, NotImplementedError, ValueError) as e:
        logger.error(f"[hash_password] ERROR: {e}", exc_info=True)
        raise HashingFailed(str(e)) from e
    return hashed.decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    """
    Check a password against a stored bcrypt hash.

    Mismatch returns False; only a malformed hash raises InvalidHashFormat.
    The comparison inside bcrypt is constant time.
    """
    try:
        hashed_bytes = hashed.encode("ascii")
    except (UnicodeEncodeError, AttributeError) as e:
        raise InvalidHashFormat("Stored hash is not ascii") from e

    if not password_fits(password):
        # Can never have been produced by hash_password; still validate the hash.
        _check_format(hashed_bytes)
        return False

    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_bytes)
    except ValueError as e:
        raise InvalidHashFormat(str(e)) from e


def _check_format(hashed_bytes: bytes) -> None:
    parts = hashed_bytes.split(b"$")
    if len(parts) != 4 or parts[1] not in (b"2a", b"2b", b"2y") or len(hashed_bytes) != 60:
        raise InvalidHashFormat("Invalid bcrypt hash")


class PasswordHasher:
    """Async facade that keeps bcrypt's CPU work off the event loop."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(hash_password, password, self.rounds)

    async def verify(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(verify_password, password, hashed)
