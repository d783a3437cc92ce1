# promptshare/core/config.py
import logging
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    COOKIE_SECURE: bool = True

    DATABASE_URL: str
    AUTO_CREATE_TABLES: bool = False
    SEED_DEFAULT_CATEGORIES: bool = False

    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_URL: str = f"redis://{REDIS_HOST}:{REDIS_PORT}"

    RATE_LIMIT_ENABLED: bool = True
    REGISTER_RATE_LIMIT_TIMES: int = 2
    REGISTER_RATE_LIMIT_SECONDS: int = 5

    ALLOWED_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1", "test", "backend", "nginx"]

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        extra = "allow"


settings = Settings()

logger = logging.getLogger(__name__)
logger.debug("Loaded REDIS_URL: %s", settings.REDIS_URL)
logger.debug("Loaded DATABASE_URL: %s", settings.DATABASE_URL)
