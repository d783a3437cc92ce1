# promptshare/models/database_models/prompt.py
import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from promptshare.data.database import Base, utcnow


class PromptVisibility(str, enum.Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class Prompt(Base):
    """
    A user-authored prompt.

    `vote_count` mirrors the number of rows in `votes` for this prompt. It is
    only ever changed together with a vote insert or delete, inside the same
    transaction (see vote_database_services).
    """
    __tablename__ = "prompts"
    __table_args__ = (
        Index("ix_prompts_listing", "is_deleted", "visibility", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(128), nullable=False)
    description = Column(String(512), nullable=True)
    content = Column(Text, nullable=False)
    visibility = Column(
        Enum(PromptVisibility, name="prompt_visibility"),
        default=PromptVisibility.PUBLIC,
        nullable=False,
    )
    vote_count = Column(Integer, default=0, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)

    author_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    author = relationship("User", back_populates="prompts")
    category = relationship("Category", back_populates="prompts")
    votes = relationship("Vote", back_populates="prompt")
