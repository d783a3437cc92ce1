# promptshare/api/routes/prompt_routes.py
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from promptshare.core.errors import BadRequestError, ForbiddenError, NotFoundError
from promptshare.data.database import get_db
from promptshare.models.database_models.user import User
from promptshare.models.prompt_models import (
    CreatedPrompt,
    PaginatedPrompts,
    PromptCreate,
    PromptDetails,
    PromptListQuery,
    PromptUpdate,
    RankedPromptQuery,
)
from promptshare.services import prompt_services
from promptshare.services.auth_services import (
    get_current_user_from_cookie,
    get_optional_user_from_cookie,
)

router = APIRouter(tags=["Prompts"])


@router.get("", response_model=PaginatedPrompts)
async def list_prompts(
    query: Annotated[PromptListQuery, Query()],
    user: Optional[User] = Depends(get_optional_user_from_cookie),
    db: AsyncSession = Depends(get_db),
):
    """
    List public prompts, newest first by default.

    Passing your own `user_id` also returns your private prompts.
    """
    try:
        return await prompt_services.list_prompts(db, query, current_user=user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/trending", response_model=PaginatedPrompts)
async def list_trending_prompts(query: Annotated[RankedPromptQuery, Query()], db: AsyncSession = Depends(get_db)):
    """Prompts ranked by votes received within the last `period` days."""
    try:
        return await prompt_services.list_trending_prompts(db, query)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/top", response_model=PaginatedPrompts)
async def list_top_prompts(query: Annotated[RankedPromptQuery, Query()], db: AsyncSession = Depends(get_db)):
    """Prompts created within the last `period` days, ranked by total votes."""
    try:
        return await prompt_services.list_top_prompts(db, query)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("", response_model=CreatedPrompt, status_code=status.HTTP_201_CREATED)
async def create_prompt(
    command: PromptCreate,
    user: User = Depends(get_current_user_from_cookie),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await prompt_services.create_prompt(db, command, user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/{prompt_id}", response_model=PromptDetails)
async def get_prompt(
    prompt_id: int,
    user: Optional[User] = Depends(get_optional_user_from_cookie),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await prompt_services.get_prompt_details(db, prompt_id, user)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Prompt not found")


@router.patch("/{prompt_id}", response_model=CreatedPrompt)
async def update_prompt(
    prompt_id: int,
    command: PromptUpdate,
    user: User = Depends(get_current_user_from_cookie),
    db: AsyncSession = Depends(get_db),
):
    if not command.model_fields_set:
        raise HTTPException(status_code=400, detail="Request body cannot be empty")

    try:
        return await prompt_services.update_prompt(db, prompt_id, user, command)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prompt(
    prompt_id: int,
    user: User = Depends(get_current_user_from_cookie),
    db: AsyncSession = Depends(get_db),
):
    """Soft-delete one of your prompts."""
    try:
        await prompt_services.delete_prompt(db, prompt_id, user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=e.message)
