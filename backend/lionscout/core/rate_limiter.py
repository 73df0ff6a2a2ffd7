"""
Rate limiting for the admin password gate
"""
from collections import deque
from typing import Callable, Deque, Dict
from fastapi import Request, HTTPException, status
import hashlib
import logging
import time

logger = logging.getLogger(__name__)


class LoginAttemptLimiter:
    """Sliding-window count of failed admin logins per client address"""

    def __init__(self, max_attempts: int = 5, window_seconds: int = 900, clock: Callable[[], float] = time.monotonic):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.clock = clock
        self.failures: Dict[str, Deque[float]] = {}

    @staticmethod
    def client_key(request: Request) -> str:
        client_ip = request.client.host if request.client else "unknown"
        # Addresses are not kept in clear
        return hashlib.sha256(client_ip.encode()).hexdigest()[:16]

    def _recent_failures(self, key: str) -> Deque[float]:
        failures = self.failures.get(key, deque())
        cutoff = self.clock() - self.window_seconds
        while failures and failures[0] <= cutoff:
            failures.popleft()
        if not failures:
            self.failures.pop(key, None)
        return failures

    def check(self, request: Request) -> None:
        """Raise 429 once the client has used up its failed attempts"""
        key = self.client_key(request)
        failures = self._recent_failures(key)
        if len(failures) >= self.max_attempts:
            retry_after = int(failures[0] + self.window_seconds - self.clock()) + 1
            logger.warning(f"Admin login locked for client {key[:8]}...")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"Too many login attempts. Please try again in {retry_after} seconds.",
                headers={"Retry-After": str(retry_after)}
            )

    def record_failure(self, request: Request) -> None:
        key = self.client_key(request)
        self.failures.setdefault(key, deque()).append(self.clock())

    def reset(self, request: Request) -> None:
        self.failures.pop(self.client_key(request), None)


admin_login_limiter = LoginAttemptLimiter()
