"""Unit tests for the sliding-window RateLimiter."""

import pytest

from serveis.domain.shared.exceptions import RateLimitExceededError
from serveis.infrastructure.security.rate_limiter import (
    DEFAULT_POLICIES,
    LOGIN_POLICY,
    REGISTER_POLICY,
    RateLimiter,
    RateLimitPolicy,
)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestRateLimiter:
    def setup_method(self):
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.limiter = RateLimiter(
            policies={"test": RateLimitPolicy(max_requests=2, window_seconds=60)},
            clock=self.clock,
        )

    def test_allows_up_to_limit(self):
        self.limiter.check("test", "1.2.3.4")
        self.limiter.check("test", "1.2.3.4")

        assert self.limiter.remaining("test", "1.2.3.4") == 0

    def test_rejects_over_limit_with_retry_after(self):
        """The third request in the window is rejected until a slot frees up."""
        self.limiter.check("test", "1.2.3.4")
        self.clock.now += 10
        self.limiter.check("test", "1.2.3.4")

        with pytest.raises(RateLimitExceededError) as exc_info:
            self.limiter.check("test", "1.2.3.4")

        assert exc_info.value.retry_after == 51

    def test_window_slides(self):
        self.limiter.check("test", "1.2.3.4")
        self.limiter.check("test", "1.2.3.4")
        self.clock.now += 60

        self.limiter.check("test", "1.2.3.4")

    def test_clients_are_independent(self):
        self.limiter.check("test", "1.2.3.4")
        self.limiter.check("test", "1.2.3.4")

        self.limiter.check("test", "5.6.7.8")

    def test_rejected_requests_are_not_counted(self):
        self.limiter.check("test", "1.2.3.4")
        self.limiter.check("test", "1.2.3.4")
        with pytest.raises(RateLimitExceededError):
            self.limiter.check("test", "1.2.3.4")

        self.clock.now += 60
        assert self.limiter.remaining("test", "1.2.3.4") == 2

    def test_disabled_limiter_never_rejects(self):
        limiter = RateLimiter(enabled=False)
        for _ in range(20):
            limiter.check(LOGIN_POLICY, "1.2.3.4")

    def test_unknown_policy(self):
        with pytest.raises(KeyError):
            self.limiter.check("nope", "1.2.3.4")

    def test_reset(self):
        self.limiter.check("test", "1.2.3.4")
        self.limiter.check("test", "1.2.3.4")

        self.limiter.reset()

        assert self.limiter.remaining("test", "1.2.3.4") == 2


class TestDefaultPolicies:
    def test_login_and_register_budgets(self):
        assert DEFAULT_POLICIES[LOGIN_POLICY] == RateLimitPolicy(5, 15 * 60)
        assert DEFAULT_POLICIES[REGISTER_POLICY] == RateLimitPolicy(3, 60 * 60)


class TestRateLimiterBookkeeping:
    def setup_method(self):
        self.clock = FakeClock()
        self.limiter = RateLimiter(
            policies={"test": RateLimitPolicy(max_requests=2, window_seconds=60)},
            clock=self.clock,
        )

    def test_expired_clients_are_forgotten(self):
        """Keys whose window has emptied do not accumulate."""
        for i in range(50):
            self.limiter.check("test", f"10.0.0.{i}")
        assert self.limiter.tracked_clients == 50

        self.clock.now += 61
        self.limiter.check("test", "10.0.0.1")

        for i in range(50):
            assert self.limiter.remaining("test", f"10.0.0.{i}") >= 1
        assert self.limiter.tracked_clients == 1

    def test_remaining_does_not_track_unknown_clients(self):
        assert self.limiter.remaining("test", "9.9.9.9") == 2
        assert self.limiter.tracked_clients == 0

    def test_forgive_returns_the_latest_slot(self):
        self.limiter.check("test", "1.2.3.4")
        self.limiter.check("test", "1.2.3.4")

        self.limiter.forgive("test", "1.2.3.4")

        assert self.limiter.remaining("test", "1.2.3.4") == 1
        self.limiter.check("test", "1.2.3.4")

    def test_forgive_unknown_client_is_noop(self):
        self.limiter.forgive("test", "1.2.3.4")

        assert self.limiter.tracked_clients == 0
