"""In-process fixed-window rate limiting per client address."""
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

from fastapi import Request
from fastapi.responses import JSONResponse

from app.utils.exceptions import RateLimited
from app.utils.logger import logger


@dataclass
class RateDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_in: int  # seconds until the current window closes


class RateLimiter:
    """Counts requests per key inside fixed windows of ``window_seconds``."""

    def __init__(self, max_requests: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateDecision:
        now = self.clock()
        with self._lock:
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            count += 1
            self._windows[key] = (started, count)
            self._prune(now)

        reset_in = max(0, math.ceil(started + self.window_seconds - now))
        return RateDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_in=reset_in,
        )

    def _prune(self, now: float) -> None:
        # Caller holds the lock
        if len(self._windows) < 10_000:
            return
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for k in expired:
            del self._windows[k]


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limit_headers(decision: RateDecision) -> Dict[str, str]:
    return {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(decision.remaining),
        "RateLimit-Reset": str(decision.reset_in),
    }


def rate_limit_middleware(limiter: RateLimiter):
    """Build an ``http`` middleware enforcing ``limiter`` on every request."""

    async def middleware(request: Request, call_next):
        key = client_key(request)
        decision = limiter.hit(key)
        headers = rate_limit_headers(decision)
        if not decision.allowed:
            logger.warning(f"Rate limit exceeded for {key} on {request.method} {request.url.path}")
            error = RateLimited()
            headers["Retry-After"] = str(decision.reset_in)
            return JSONResponse(status_code=error.status_code, content=error.to_dict(), headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response

    return middleware
