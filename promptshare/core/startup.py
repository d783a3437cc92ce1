# promptshare/core/startup.py
import logging

from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter
from redis.asyncio import Redis

from promptshare.core.config import settings
from promptshare.core.dependencies import create_redis_client
from promptshare.data.database import AsyncSessionLocal, init_db
from promptshare.services.database.category_database_services import ensure_categories

logger = logging.getLogger(__name__)

redis_client_instance: Redis = None


async def startup_event(app: FastAPI):
    """
    Initialize resources on application startup.
    """
    global redis_client_instance

    try:
        if settings.AUTO_CREATE_TABLES:
            await init_db()

        if settings.SEED_DEFAULT_CATEGORIES:
            async with AsyncSessionLocal() as db:
                await ensure_categories(db)
            logger.info("Default categories ensured.")

        if settings.RATE_LIMIT_ENABLED:
            redis_client_instance = create_redis_client()
            await FastAPILimiter.init(redis_client_instance, prefix="limit:")
            logger.info("FastAPILimiter initialized successfully.")

    except Exception:
        logger.exception("Failed to startup")
        raise


async def shutdown_event(app: FastAPI):
    if redis_client_instance is not None:
        await redis_client_instance.close()
