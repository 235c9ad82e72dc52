"""Unit tests for the RefreshToken entity."""

from datetime import timedelta

from serveis.domain.session import RefreshToken
from serveis.domain.shared.time import utc_now


def _token(**overrides) -> RefreshToken:
    values = {
        "id": 1,
        "user_id": 1,
        "token": "secret-token-value",
        "expires_at": utc_now() + timedelta(days=1),
    }
    values.update(overrides)
    return RefreshToken(**values)


class TestRefreshToken:
    def test_fresh_token_is_usable(self):
        assert _token().is_usable()

    def test_revoked_token_is_not_usable(self):
        assert not _token(revoked=True).is_usable()

    def test_expired_token_is_not_usable(self):
        token = _token(expires_at=utc_now() - timedelta(seconds=1))

        assert token.is_expired()
        assert not token.is_usable()

    def test_naive_expiry_is_treated_as_utc(self):
        """Rows read back from SQLite carry naive datetimes."""
        naive = (utc_now() + timedelta(hours=1)).replace(tzinfo=None)
        assert _token(expires_at=naive).is_usable()

    def test_repr_hides_token_value(self):
        assert "secret-token-value" not in repr(_token())
