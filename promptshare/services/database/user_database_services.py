# promptshare/services/database/user_database_services.py
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from promptshare.models.database_models.user import User


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(select(User).filter(User.id == user_id))
    return result.scalars().first()


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).filter(User.username == username.lower()))
    return result.scalars().first()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).filter(User.email == email))
    return result.scalars().first()


async def create_user(
    db: AsyncSession,
    username: str,
    email: str,
    hashed_password: bytes,
    display_name: Optional[str] = None,
) -> User:
    username = username.lower()
    result = await db.execute(select(exists().where(User.username == username)))
    if result.scalar():
        raise ValueError("Username already taken")
    result = await db.execute(select(exists().where(User.email == email)))
    if result.scalar():
        raise ValueError("Email already registered")

    db_user = User(
        username=username,
        email=email,
        hashed_password=hashed_password,
        display_name=display_name,
    )
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)
    return db_user

