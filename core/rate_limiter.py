# core/rate_limiter.py

from typing import Dict, List, Optional, Tuple
from fastapi import HTTPException, Request
from collections import defaultdict
import time

from core.config import settings


# In-memory, per-process sliding window for the public auth endpoints
_rate_limit_store: Dict[str, List[float]] = defaultdict(list)


def check_rate_limit(
    identifier: str,
    max_requests: int,
    window_seconds: int,
) -> Tuple[bool, int]:
    """
    Record one attempt for `identifier`.

    Returns:
        (allowed, remaining attempts in the current window)
    """
    now = time.time()
    window_start = now - window_seconds

    attempts = [ts for ts in _rate_limit_store[identifier] if ts > window_start]

    if len(attempts) >= max_requests:
        _rate_limit_store[identifier] = attempts
        return False, 0

    attempts.append(now)
    _rate_limit_store[identifier] = attempts
    return True, max_requests - len(attempts)


def reset_rate_limits() -> None:
    _rate_limit_store.clear()


def client_ip(request: Request) -> str:
    # First X-Forwarded-For hop wins behind a proxy
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def get_rate_limit_identifier(request: Request, email: Optional[str] = None) -> str:
    """Key on the submitted email when there is one, else the client IP."""
    if email:
        return f"email:{email.strip().lower()}"
    return f"ip:{client_ip(request)}"


def require_rate_limit(
    request: Request,
    identifier: Optional[str] = None,
    max_requests: Optional[int] = None,
    window_seconds: Optional[int] = None,
) -> int:
    """
    Raises:
        HTTPException: 429 once the window is used up
    """
    max_requests = max_requests or settings.AUTH_RATE_LIMIT_MAX_REQUESTS
    window_seconds = window_seconds or settings.AUTH_RATE_LIMIT_WINDOW_SECONDS

    if identifier is None:
        identifier = get_rate_limit_identifier(request)

    allowed, remaining = check_rate_limit(identifier, max_requests, window_seconds)

    if not allowed:
        raise HTTPException(
            status_code=429,
            detail=f"Too many attempts. Maximum {max_requests} requests per {window_seconds} seconds.",
            headers={
                "X-RateLimit-Limit": str(max_requests),
                "X-RateLimit-Window": str(window_seconds),
                "Retry-After": str(window_seconds),
            }
        )

    return remaining
