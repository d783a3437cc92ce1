# promptshare/services/database/prompt_database_services.py
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import asc, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from promptshare.models.database_models.prompt import Prompt, PromptVisibility
from promptshare.models.database_models.vote import Vote


def _prompt_query():
    return select(Prompt).options(selectinload(Prompt.author), selectinload(Prompt.category))


def _visible_conditions(category_id: Optional[int] = None, include_private: bool = False) -> list:
    conditions = [Prompt.is_deleted == False]  # noqa: E712
    if not include_private:
        conditions.append(Prompt.visibility == PromptVisibility.PUBLIC)
    if category_id is not None:
        conditions.append(Prompt.category_id == category_id)
    return conditions


async def get_prompt(db: AsyncSession, prompt_id: int, include_deleted: bool = False) -> Optional[Prompt]:
    """Fetch a prompt with its author and category loaded."""
    query = _prompt_query().where(Prompt.id == prompt_id)
    if not include_deleted:
        query = query.where(Prompt.is_deleted == False)  # noqa: E712
    result = await db.execute(query.execution_options(populate_existing=True))
    return result.scalars().first()


async def get_prompts_by_ids(db: AsyncSession, prompt_ids: List[int]) -> List[Prompt]:
    """Fetch prompts in the order of `prompt_ids`, skipping ids that no longer exist."""
    if not prompt_ids:
        return []
    result = await db.execute(_prompt_query().where(Prompt.id.in_(prompt_ids)))
    by_id = {prompt.id: prompt for prompt in result.scalars().all()}
    return [by_id[prompt_id] for prompt_id in prompt_ids if prompt_id in by_id]


async def insert_prompt(db: AsyncSession, author_id: int, values: Dict[str, Any]) -> Prompt:
    prompt = Prompt(author_id=author_id, **values)
    db.add(prompt)
    await db.commit()
    return await get_prompt(db, prompt.id)


async def update_prompt_fields(db: AsyncSession, prompt: Prompt, changes: Dict[str, Any]) -> Prompt:
    for field, value in changes.items():
        setattr(prompt, field, value)
    await db.commit()
    return await get_prompt(db, prompt.id)


async def soft_delete_prompt(db: AsyncSession, prompt_id: int, author_id: int) -> int:
    """Flag the author's prompt as deleted. Returns the number of rows changed."""
    result = await db.execute(
        update(Prompt)
        .where(Prompt.id == prompt_id, Prompt.author_id == author_id, Prompt.is_deleted == False)  # noqa: E712
        .values(is_deleted=True)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount


async def list_prompts(
    db: AsyncSession,
    page: int,
    page_size: int,
    sort_by: str = "created_at",
    order: str = "desc",
    category_id: Optional[int] = None,
    author_id: Optional[int] = None,
    include_private: bool = False,
) -> Tuple[List[Prompt], int]:
    conditions = _visible_conditions(category_id, include_private)
    if author_id is not None:
        conditions.append(Prompt.author_id == author_id)

    direction = asc if order == "asc" else desc
    query = (
        _prompt_query()
        .where(*conditions)
        .order_by(direction(getattr(Prompt, sort_by)), direction(Prompt.id))
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await db.execute(query)
    total = await db.scalar(select(func.count(Prompt.id)).where(*conditions))
    return result.scalars().all(), total or 0


async def list_trending_prompt_ids(
    db: AsyncSession,
    window_start: datetime,
    page: int,
    page_size: int,
    category_id: Optional[int] = None,
) -> Tuple[List[Tuple[int, int]], int]:
    """
    Rank prompts by the number of votes cast since `window_start`.

    Returns one page of `(prompt_id, period_vote_count)` pairs in rank order,
    plus the number of prompts that received at least one vote in the window.
    Equal counts are ordered newest prompt first, then by descending id.
    """
    period_votes = func.count(Vote.id).label("period_vote_count")
    grouped = (
        select(Prompt.id.label("prompt_id"), period_votes)
        .select_from(Vote)
        .join(Prompt, Prompt.id == Vote.prompt_id)
        .where(Vote.created_at >= window_start, *_visible_conditions(category_id))
        .group_by(Prompt.id, Prompt.created_at)
    )

    ranked = (
        grouped.order_by(period_votes.desc(), Prompt.created_at.desc(), Prompt.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    rows = (await db.execute(ranked)).all()
    total = await db.scalar(select(func.count()).select_from(grouped.subquery()))
    return [(row.prompt_id, row.period_vote_count) for row in rows], total or 0


async def list_top_prompts(
    db: AsyncSession,
    created_since: datetime,
    page: int,
    page_size: int,
    category_id: Optional[int] = None,
) -> Tuple[List[Prompt], int]:
    conditions = [Prompt.created_at >= created_since, *_visible_conditions(category_id)]
    query = (
        _prompt_query()
        .where(*conditions)
        .order_by(Prompt.vote_count.desc(), Prompt.created_at.desc(), Prompt.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await db.execute(query)
    total = await db.scalar(select(func.count(Prompt.id)).where(*conditions))
    return result.scalars().all(), total or 0
