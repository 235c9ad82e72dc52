"""Unit tests for PasswordHashingService."""

import pytest

from serveis_auth.exceptions import WeakPasswordError
from serveis_auth.services import PasswordHashingService

VALID_PASSWORD = "Secure#Pass1"


class TestPasswordHashing:
    """Tests for hash and verify."""

    def setup_method(self):
        """Set up test fixtures."""
        # Minimum work factor keeps the tests fast
        self.service = PasswordHashingService(rounds=4)

    @pytest.mark.asyncio
    async def test_hash_is_not_plaintext(self):
        """The hash never contains the password."""
        hashed = await self.service.hash(VALID_PASSWORD)

        assert hashed != VALID_PASSWORD
        assert hashed.startswith("$2")

    @pytest.mark.asyncio
    async def test_verify_correct_password(self):
        hashed = await self.service.hash(VALID_PASSWORD)

        assert await self.service.verify(VALID_PASSWORD, hashed) is True

    @pytest.mark.asyncio
    async def test_verify_wrong_password(self):
        hashed = await self.service.hash(VALID_PASSWORD)

        assert await self.service.verify("Wrong#Pass1", hashed) is False

    @pytest.mark.asyncio
    async def test_same_password_hashes_differently(self):
        """Each hash uses a fresh salt."""
        first = await self.service.hash(VALID_PASSWORD)
        second = await self.service.hash(VALID_PASSWORD)

        assert first != second

    @pytest.mark.asyncio
    async def test_verify_against_malformed_hash(self):
        """A corrupt stored hash verifies as False instead of raising."""
        assert await self.service.verify(VALID_PASSWORD, "not-a-hash") is False


class TestPasswordStrength:
    """Tests for the limits bcrypt imposes."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)

    @pytest.mark.asyncio
    async def test_empty_password_rejected(self):
        with pytest.raises(WeakPasswordError, match="empty"):
            await self.service.hash("")

    @pytest.mark.asyncio
    async def test_short_password_rejected(self):
        with pytest.raises(WeakPasswordError, match="at least 8"):
            await self.service.hash("Ab#1")

    @pytest.mark.asyncio
    async def test_password_over_72_bytes_rejected(self):
        """Multi-byte characters count by their encoded length."""
        with pytest.raises(WeakPasswordError, match="72 bytes"):
            await self.service.hash("é" * 37)
