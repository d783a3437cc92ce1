# promptshare/services/database/category_database_services.py
import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from promptshare.models.database_models.category import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    "Copywriting",
    "Marketing",
    "Software Development",
    "Education",
    "Creative Writing",
]


async def get_categories(db: AsyncSession) -> List[Category]:
    result = await db.execute(select(Category).order_by(Category.name))
    return result.scalars().all()


async def get_category_by_id(db: AsyncSession, category_id: int) -> Optional[Category]:
    result = await db.execute(select(Category).where(Category.id == category_id))
    return result.scalars().first()


async def ensure_categories(db: AsyncSession, names: Iterable[str] = DEFAULT_CATEGORIES) -> List[Category]:
    """Insert the named categories that do not exist yet. Safe to call repeatedly."""
    names = list(dict.fromkeys(names))
    result = await db.execute(select(Category).where(Category.name.in_(names)))
    existing = {category.name: category for category in result.scalars().all()}

    created = [Category(name=name) for name in names if name not in existing]
    if created:
        db.add_all(created)
        await db.commit()
        logger.info("Created %d categories", len(created))

    by_name = {**existing, **{category.name: category for category in created}}
    return [by_name[name] for name in names]
