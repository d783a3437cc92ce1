# promptshare/api/routes/vote_routes.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from promptshare.core.errors import ConflictError, NotFoundError
from promptshare.data.database import get_db
from promptshare.models.database_models.user import User
from promptshare.models.vote_models import BatchCheckVotesRequest, BatchCheckVotesResult, VoteResponse
from promptshare.services.auth_services import get_current_user_from_cookie
from promptshare.services.database import vote_database_services

router = APIRouter(tags=["Votes"])


@router.post("/prompts/{prompt_id}/vote", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def create_vote(
    prompt_id: int,
    user: User = Depends(get_current_user_from_cookie),
    db: AsyncSession = Depends(get_db),
):
    """Upvote a prompt. Each user may vote once per prompt."""
    try:
        return await vote_database_services.create_vote(db, prompt_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.delete("/prompts/{prompt_id}/vote", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vote(
    prompt_id: int,
    user: User = Depends(get_current_user_from_cookie),
    db: AsyncSession = Depends(get_db),
):
    """Withdraw your vote from a prompt."""
    try:
        await vote_database_services.delete_vote(db, prompt_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/votes/batch-check", response_model=List[BatchCheckVotesResult])
async def batch_check_votes(
    request: BatchCheckVotesRequest,
    user: User = Depends(get_current_user_from_cookie),
    db: AsyncSession = Depends(get_db),
):
    """Report, for each prompt id, whether the current user has voted on it."""
    prompt_ids = list(dict.fromkeys(request.prompt_ids))
    voted = await vote_database_services.get_voted_prompt_ids(db, user.id, prompt_ids)
    return [
        BatchCheckVotesResult(prompt_id=prompt_id, has_voted=prompt_id in voted)
        for prompt_id in prompt_ids
    ]
