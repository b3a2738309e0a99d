from collections import deque
from datetime import datetime, timedelta
from threading import Lock

from moddash.adapters.clock import SystemClock
from moddash.components.auth import TimePort
from moddash.rules.models import RateLimitRules


class RateLimiter:
    """Sliding-window attempt counter for the login form, one window per client."""

    def __init__(self, rules: RateLimitRules, clock: TimePort | None = None):
        self.rules = rules
        self._clock = clock if clock is not None else SystemClock()
        self._attempts: dict[str, deque[datetime]] = {}
        self._lock = Lock()

    def hit(self, key: str, window_seconds: int, max_attempts: int) -> bool:
        """Record an attempt under key. False once max_attempts already fall in the window."""
        if max_attempts <= 0:
            return False

        now = self._clock.now_utc()
        cutoff = now - timedelta(seconds=window_seconds)
        with self._lock:
            attempts = self._attempts.setdefault(key, deque())
            while attempts and attempts[0] <= cutoff:
                attempts.popleft()
            if len(attempts) >= max_attempts:
                return False
            attempts.append(now)
            return True

    def allow_login(self, client: str) -> bool:
        window = self.rules.login
        return self.hit(f"login:{client}", window.window_seconds, window.max_attempts)

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._attempts.clear()
            else:
                self._attempts.pop(key, None)
