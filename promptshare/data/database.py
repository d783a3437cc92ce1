# promptshare/data/database.py
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from promptshare.core.config import settings

logger = logging.getLogger(__name__)


def to_async_url(database_url: str) -> str:
    """Point a plain database URL at its async driver."""
    if database_url.startswith("postgresql://"):
        async_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("sqlite://"):
        async_url = database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    else:
        return database_url
    logger.warning("Adapted database URL to: %s. Please update your configuration.", async_url)
    return async_url


def utcnow() -> datetime:
    # Columns are timezone-naive and always hold UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


async_database_url = to_async_url(settings.DATABASE_URL)

engine = create_async_engine(async_database_url, echo=settings.DEBUG)

AsyncSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine, class_=AsyncSession, expire_on_commit=False
)

Base = declarative_base()


async def get_db():
    db = AsyncSessionLocal()
    try:
        yield db
    finally:
        await db.close()


async def init_db():
    """Create any missing tables."""
    # Registers every model on Base.metadata.
    import promptshare.models.database_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized: %s", async_database_url)
