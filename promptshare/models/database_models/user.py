# promptshare/models/database_models/user.py
from sqlalchemy import Column, Integer, String, Boolean, LargeBinary, DateTime
from sqlalchemy.orm import relationship

from promptshare.data.database import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(32), unique=True, index=True, nullable=False)
    email = Column(String(320), unique=True, index=True, nullable=False)
    display_name = Column(String(100), nullable=True)
    hashed_password = Column(LargeBinary, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    prompts = relationship("Prompt", back_populates="author")
    votes = relationship("Vote", back_populates="user")
