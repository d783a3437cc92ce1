# promptshare/models/database_models/category.py
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from promptshare.data.database import Base, utcnow


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    prompts = relationship("Prompt", back_populates="category")
