"""
Rate limiting middleware using a Redis fixed window
"""

import logging
from typing import Optional, Tuple

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from podium.core.config import settings

# Configure logging
logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client request cap on auth and wager placement paths"""

    def __init__(self, app, redis_client=None, prefix: str = None):
        super().__init__(app)
        self.redis_client = redis_client
        self.prefix = prefix or settings.api_v1_prefix
        self.rate_limit_requests = settings.rate_limit_requests
        self.rate_limit_window = settings.rate_limit_window_seconds

    async def dispatch(self, request: Request, call_next):
        """Process request with rate limiting"""

        # Skip rate limiting if Redis is not available
        if not self.redis_client:
            return await call_next(request)

        rate_limit_key = self._get_rate_limit_key(request)
        if not rate_limit_key:
            return await call_next(request)

        is_allowed, retry_after = await self._check_rate_limit(rate_limit_key)

        if not is_allowed:
            logger.warning(f"Rate limit exceeded for key: {rate_limit_key}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "detail": "Rate limit exceeded",
                    "retry_after": retry_after
                },
                headers={"Retry-After": str(retry_after)}
            )

        response = await call_next(request)
        await self._record_request(rate_limit_key)
        return response

    def _get_rate_limit_key(self, request: Request) -> Optional[str]:
        """Get rate limit key based on request path and client"""
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        if path.startswith(f"{self.prefix}/auth/"):
            return f"rate_limit:auth:{client_ip}"

        if request.method == "POST" and path in (
            f"{self.prefix}/betting/wagers",
            f"{self.prefix}/betting/special-wagers",
        ):
            return f"rate_limit:wager:{client_ip}"

        return None

    async def _check_rate_limit(self, key: str) -> Tuple[bool, int]:
        """Check if request is within rate limit"""
        try:
            request_count = await self.redis_client.get(key)
            request_count = int(request_count) if request_count else 0

            if request_count >= self.rate_limit_requests:
                ttl = await self.redis_client.ttl(key)
                retry_after = max(1, ttl) if ttl > 0 else self.rate_limit_window
                return False, retry_after

            return True, 0

        except Exception as e:
            logger.error(f"Error checking rate limit for key {key}: {e}")
            # Allow request if rate limiting fails
            return True, 0

    async def _record_request(self, key: str):
        """Record a request for rate limiting"""
        try:
            pipe = self.redis_client.pipeline()
            pipe.incr(key)
            pipe.expire(key, self.rate_limit_window)
            await pipe.execute()

        except Exception as e:
            logger.error(f"Error recording request for key {key}: {e}")
