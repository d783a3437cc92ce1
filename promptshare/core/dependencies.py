# promptshare/core/dependencies.py
import redis.asyncio as redis  # Use asyncio Redis client
from fastapi import Request, Response
from fastapi_limiter.depends import RateLimiter

from promptshare.core.config import settings

register_rate_limiter = RateLimiter(
    times=settings.REGISTER_RATE_LIMIT_TIMES, seconds=settings.REGISTER_RATE_LIMIT_SECONDS
)


def create_redis_client() -> redis.Redis:
    return redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)


async def rate_limit_register(request: Request, response: Response):
    """Throttle account creation per client when rate limiting is enabled."""
    if not settings.RATE_LIMIT_ENABLED:
        return
    await register_rate_limiter(request, response)
