# promptshare/services/prompt_services.py
import logging
import math
from datetime import timedelta
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from promptshare.core.errors import BadRequestError, ForbiddenError, NotFoundError
from promptshare.data.database import utcnow
from promptshare.models.database_models.prompt import Prompt, PromptVisibility
from promptshare.models.database_models.user import User
from promptshare.models.prompt_models import (
    CreatedPrompt,
    PaginatedPrompts,
    Pagination,
    PromptCreate,
    PromptDetails,
    PromptListQuery,
    PromptSummary,
    PromptUpdate,
    RankedPromptQuery,
)
from promptshare.services.database import prompt_database_services
from promptshare.services.database.category_database_services import get_category_by_id
from promptshare.services.database.vote_database_services import has_voted

logger = logging.getLogger(__name__)

# Columns that may not be set to NULL through a partial update.
REQUIRED_FIELDS = ("title", "content", "visibility", "category_id")


def _paginate(items: List[PromptSummary], page: int, page_size: int, total_items: int) -> PaginatedPrompts:
    return PaginatedPrompts(
        data=items,
        pagination=Pagination(
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=math.ceil(total_items / page_size),
        ),
    )


async def _require_category(db: AsyncSession, category_id: Optional[int]) -> None:
    if category_id is not None and await get_category_by_id(db, category_id) is None:
        raise NotFoundError("Category not found")


async def create_prompt(db: AsyncSession, command: PromptCreate, author: User) -> CreatedPrompt:
    if await get_category_by_id(db, command.category_id) is None:
        raise NotFoundError("Category not found")

    prompt = await prompt_database_services.insert_prompt(db, author.id, command.model_dump())
    logger.info("User %s created prompt %s", author.id, prompt.id)
    return CreatedPrompt.model_validate(prompt)


async def update_prompt(db: AsyncSession, prompt_id: int, user: User, command: PromptUpdate) -> CreatedPrompt:
    changes = command.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            del changes[field]
    if not changes:
        raise BadRequestError("Request body cannot be empty")

    prompt = await prompt_database_services.get_prompt(db, prompt_id)
    # Someone else's prompt is reported as missing rather than forbidden.
    if prompt is None or prompt.author_id != user.id:
        raise NotFoundError("Prompt not found")

    if "category_id" in changes and await get_category_by_id(db, changes["category_id"]) is None:
        raise BadRequestError("Category not found")

    updated = await prompt_database_services.update_prompt_fields(db, prompt, changes)
    return CreatedPrompt.model_validate(updated)


async def get_prompt_details(db: AsyncSession, prompt_id: int, user: Optional[User] = None) -> PromptDetails:
    prompt = await prompt_database_services.get_prompt(db, prompt_id)
    if prompt is None:
        raise NotFoundError("Prompt not found")

    if prompt.visibility == PromptVisibility.PRIVATE and (user is None or prompt.author_id != user.id):
        raise NotFoundError("Prompt not found")

    details = PromptDetails.model_validate(prompt)
    if user is not None:
        details.has_voted = await has_voted(db, prompt.id, user.id)
    return details


async def delete_prompt(db: AsyncSession, prompt_id: int, user: User) -> None:
    if await prompt_database_services.soft_delete_prompt(db, prompt_id, user.id):
        logger.info("User %s deleted prompt %s", user.id, prompt_id)
        return

    prompt: Optional[Prompt] = await prompt_database_services.get_prompt(db, prompt_id)
    if prompt is None:
        raise NotFoundError("Prompt not found")
    raise ForbiddenError("You do not have permission to delete this prompt.")


async def list_prompts(db: AsyncSession, query: PromptListQuery, current_user: Optional[User] = None) -> PaginatedPrompts:
    await _require_category(db, query.category_id)

    include_private = (
        current_user is not None and query.user_id is not None and query.user_id == current_user.id
    )
    prompts, total_items = await prompt_database_services.list_prompts(
        db,
        page=query.page,
        page_size=query.page_size,
        sort_by=query.sort_by.value,
        order=query.order.value,
        category_id=query.category_id,
        author_id=query.user_id,
        include_private=include_private,
    )
    items = [PromptSummary.model_validate(prompt) for prompt in prompts]
    return _paginate(items, query.page, query.page_size, total_items)


async def list_trending_prompts(db: AsyncSession, query: RankedPromptQuery) -> PaginatedPrompts:
    await _require_category(db, query.category_id)

    window_start = utcnow() - timedelta(days=query.period)
    ranked, total_items = await prompt_database_services.list_trending_prompt_ids(
        db,
        window_start=window_start,
        page=query.page,
        page_size=query.page_size,
        category_id=query.category_id,
    )
    if not ranked:
        return _paginate([], query.page, query.page_size, total_items)

    period_counts = dict(ranked)
    prompts = await prompt_database_services.get_prompts_by_ids(db, [prompt_id for prompt_id, _ in ranked])

    items = []
    for prompt in prompts:
        item = PromptSummary.model_validate(prompt)
        item.period_vote_count = period_counts[prompt.id]
        items.append(item)
    return _paginate(items, query.page, query.page_size, total_items)


async def list_top_prompts(db: AsyncSession, query: RankedPromptQuery) -> PaginatedPrompts:
    await _require_category(db, query.category_id)

    created_since = utcnow() - timedelta(days=query.period)
    prompts, total_items = await prompt_database_services.list_top_prompts(
        db,
        created_since=created_since,
        page=query.page,
        page_size=query.page_size,
        category_id=query.category_id,
    )
    items = [PromptSummary.model_validate(prompt) for prompt in prompts]
    return _paginate(items, query.page, query.page_size, total_items)
