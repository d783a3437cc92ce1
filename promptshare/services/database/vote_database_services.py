# promptshare/services/database/vote_database_services.py
import logging
from typing import Iterable, Set

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from promptshare.core.errors import ConflictError, NotFoundError
from promptshare.models.database_models.prompt import Prompt, PromptVisibility
from promptshare.models.database_models.vote import Vote

logger = logging.getLogger(__name__)


async def create_vote(db: AsyncSession, prompt_id: int, user_id: int) -> Vote:
    """
    Record a vote and bump the prompt's counter in one transaction.

    Raises NotFoundError when the prompt is missing, soft-deleted, or private
    to another user, and ConflictError when the user has already voted.
    """
    try:
        result = await db.execute(
            select(Prompt).where(Prompt.id == prompt_id, Prompt.is_deleted == False)  # noqa: E712
        )
        prompt = result.scalars().first()
        if prompt is None or (
            prompt.visibility == PromptVisibility.PRIVATE and prompt.author_id != user_id
        ):
            raise NotFoundError("Prompt not found.")

        vote = Vote(prompt_id=prompt_id, user_id=user_id)
        db.add(vote)
        await db.flush()

        await db.execute(
            update(Prompt)
            .where(Prompt.id == prompt_id)
            .values(vote_count=Prompt.vote_count + 1)
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info("Duplicate vote by user %s on prompt %s", user_id, prompt_id)
        raise ConflictError("You have already voted for this prompt.") from e
    except Exception:
        await db.rollback()
        raise

    return vote


async def delete_vote(db: AsyncSession, prompt_id: int, user_id: int) -> None:
    """Remove the user's vote and decrement the prompt's counter in one transaction."""
    try:
        result = await db.execute(
            delete(Vote)
            .where(Vote.user_id == user_id, Vote.prompt_id == prompt_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("Vote not found.")

        await db.execute(
            update(Prompt)
            .where(Prompt.id == prompt_id)
            .values(vote_count=Prompt.vote_count - 1)
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise


async def has_voted(db: AsyncSession, prompt_id: int, user_id: int) -> bool:
    result = await db.execute(
        select(Vote.id).where(Vote.user_id == user_id, Vote.prompt_id == prompt_id)
    )
    return result.first() is not None


async def get_voted_prompt_ids(db: AsyncSession, user_id: int, prompt_ids: Iterable[int]) -> Set[int]:
    prompt_ids = list(prompt_ids)
    if not prompt_ids:
        return set()
    result = await db.execute(
        select(Vote.prompt_id).where(Vote.user_id == user_id, Vote.prompt_id.in_(prompt_ids))
    )
    return set(result.scalars().all())


async def recompute_vote_counts(db: AsyncSession) -> int:
    """Set every prompt's `vote_count` from the vote table. Returns the number of prompts updated."""
    counts = dict(
        (await db.execute(select(Vote.prompt_id, func.count(Vote.id)).group_by(Vote.prompt_id))).all()
    )
    await db.execute(update(Prompt).values(vote_count=0))
    for prompt_id, count in counts.items():
        await db.execute(update(Prompt).where(Prompt.id == prompt_id).values(vote_count=count))
    await db.commit()
    return len(counts)
