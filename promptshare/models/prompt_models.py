# promptshare/models/prompt_models.py
"""
Request and response shapes for the prompt endpoints.

Commands (`PromptCreate`, `PromptUpdate`) validate what callers send;
the response models are built from ORM rows with `from_attributes`.
"""
import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from promptshare.models.category_models import CategoryResponse
from promptshare.models.database_models.prompt import PromptVisibility

MAX_PAGE_SIZE = 100
MAX_PERIOD_DAYS = 3650


class PromptSortField(str, enum.Enum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"
    VOTE_COUNT = "vote_count"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


def _clean_description(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class PromptCreate(BaseModel):
    title: str = Field(min_length=1, max_length=128)
    description: Optional[str] = Field(default=None, max_length=512)
    content: str = Field(min_length=1, max_length=50000)
    visibility: PromptVisibility = PromptVisibility.PUBLIC
    category_id: int

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("description")
    @classmethod
    def clean_description(cls, value: Optional[str]) -> Optional[str]:
        return _clean_description(value)


class PromptUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=128)
    description: Optional[str] = Field(default=None, max_length=512)
    content: Optional[str] = Field(default=None, min_length=1, max_length=50000)
    visibility: Optional[PromptVisibility] = None
    category_id: Optional[int] = None

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("description")
    @classmethod
    def clean_description(cls, value: Optional[str]) -> Optional[str]:
        return _clean_description(value)


class PromptListQuery(BaseModel):
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)
    category_id: Optional[int] = None
    sort_by: PromptSortField = PromptSortField.CREATED_AT
    order: SortOrder = SortOrder.DESC
    user_id: Optional[int] = None


class RankedPromptQuery(BaseModel):
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)
    period: int = Field(default=7, ge=1, le=MAX_PERIOD_DAYS)
    category_id: Optional[int] = None


class AuthorSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class PromptBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    visibility: PromptVisibility
    created_at: datetime
    updated_at: datetime
    author: Optional[AuthorSummary] = None
    category: CategoryResponse


class PromptSummary(PromptBase):
    vote_count: int
    period_vote_count: Optional[int] = None


class CreatedPrompt(PromptBase):
    content: str


class PromptDetails(PromptBase):
    content: str
    vote_count: int
    has_voted: bool = False


class Pagination(BaseModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int


class PaginatedPrompts(BaseModel):
    data: List[PromptSummary]
    pagination: Pagination
