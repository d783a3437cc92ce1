# promptshare/models/vote_models.py
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class VoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    prompt_id: int
    created_at: datetime


class BatchCheckVotesRequest(BaseModel):
    prompt_ids: List[int] = Field(min_length=1, max_length=100)


class BatchCheckVotesResult(BaseModel):
    prompt_id: int
    has_voted: bool
