"""Password hashing service using bcrypt.

Hashing and verification are CPU-bound by design, so both run in a
worker thread to keep the event loop responsive.
"""

import asyncio

import bcrypt

from serveis_auth.exceptions import WeakPasswordError
from serveis_auth.ports import PasswordHasher


class PasswordHashingService(PasswordHasher):
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = await service.hash("my_secure_password")
    >>> await service.verify("my_secure_password", hash)
    True
    >>> await service.verify("wrong_password", hash)
    False
    """

    MIN_LENGTH = 8
    # bcrypt only considers the first 72 bytes and rejects longer input
    MAX_BYTES = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which takes a few hundred milliseconds per hash on current
            hardware. Tests use the minimum of 4.
        """
        self._rounds = rounds

    async def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        return await asyncio.to_thread(self._hash_sync, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Returns
        -------
        True if password matches, False otherwise
        """
        return await asyncio.to_thread(self._verify_sync, password, password_hash)

    def validate_strength(self, password: str) -> None:
        """Validate that a password can be hashed safely.

        Character-class rules are enforced by the request schemas; this
        only guards the limits bcrypt itself imposes.
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

    def _hash_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def _verify_sync(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format or over-long password
            return False
