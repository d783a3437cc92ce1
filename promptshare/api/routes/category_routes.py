# promptshare/api/routes/category_routes.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from promptshare.data.database import get_db
from promptshare.models.category_models import CategoryResponse
from promptshare.services.database.category_database_services import get_categories

router = APIRouter(tags=["Categories"])


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """All prompt categories, alphabetically."""
    return await get_categories(db)
