"""In-memory sliding-window rate limiter.

Keeps request timestamps per ``(policy, client)`` key in process memory,
so limits are per worker process.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass
from threading import Lock
from typing import Callable

from serveis.domain.shared.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitPolicy:
    """At most ``max_requests`` within any ``window_seconds`` span."""

    max_requests: int
    window_seconds: int


LOGIN_POLICY = "login"
REGISTER_POLICY = "register"

DEFAULT_POLICIES: dict[str, RateLimitPolicy] = {
    # 5 login attempts per 15 minutes per client
    LOGIN_POLICY: RateLimitPolicy(max_requests=5, window_seconds=15 * 60),
    # 3 registrations per hour per client
    REGISTER_POLICY: RateLimitPolicy(max_requests=3, window_seconds=60 * 60),
}


class RateLimiter:
    """Thread-safe sliding-window limiter keyed by policy and client."""

    def __init__(
        self,
        policies: dict[str, RateLimitPolicy] | None = None,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._policies = dict(policies or DEFAULT_POLICIES)
        self._enabled = enabled
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def tracked_clients(self) -> int:
        return len(self._hits)

    def _policy(self, policy_name: str) -> RateLimitPolicy:
        policy = self._policies.get(policy_name)
        if policy is None:
            msg = f"Unknown rate limit policy: {policy_name}"
            raise KeyError(msg)
        return policy

    def _live_hits(self, key: str, policy: RateLimitPolicy, now: float) -> deque[float]:
        # Drop hits outside the window; a key with none left is forgotten
        hits = self._hits.get(key, deque())
        cutoff = now - policy.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if not hits:
            self._hits.pop(key, None)
        return hits

    def check(self, policy_name: str, client: str) -> None:
        """Record a request, raising if the client is over the policy.

        Raises
        ------
        RateLimitExceededError
            With ``retry_after`` set to the seconds until a slot frees up.
        """
        if not self._enabled:
            return

        policy = self._policy(policy_name)
        key = f"{policy_name}:{client}"
        with self._lock:
            now = self._clock()
            hits = self._live_hits(key, policy, now)

            if len(hits) >= policy.max_requests:
                retry_after = max(int(hits[0] + policy.window_seconds - now) + 1, 1)
                logger.warning(
                    "Rate limit '%s' exceeded by %s (retry in %ds)",
                    policy_name,
                    client,
                    retry_after,
                )
                raise RateLimitExceededError(retry_after=retry_after)

            hits.append(now)
            self._hits[key] = hits

    def forgive(self, policy_name: str, client: str) -> None:
        """Take back the client's latest hit, for requests that succeeded."""
        if not self._enabled:
            return

        key = f"{policy_name}:{client}"
        with self._lock:
            hits = self._hits.get(key)
            if hits:
                hits.pop()
            if not hits:
                self._hits.pop(key, None)

    def remaining(self, policy_name: str, client: str) -> int:
        policy = self._policy(policy_name)
        key = f"{policy_name}:{client}"
        with self._lock:
            hits = self._live_hits(key, policy, self._clock())
            return max(0, policy.max_requests - len(hits))

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
