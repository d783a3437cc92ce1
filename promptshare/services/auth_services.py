# promptshare/services/auth_services.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, status, Request, Response
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import or_, select

from promptshare.core.config import settings
from promptshare.data.database import get_db
from promptshare.models.database_models.user import User

from promptshare.models.auth_models import PasswordValidationError

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"


def verify_password(plain_password, hashed_password):
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8') if isinstance(hashed_password, str) else hashed_password)


def hash_password(password):
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())


async def authenticate_user(db: AsyncSession, login: str, password: str):
    """Look a user up by username or email and check the password."""
    result = await db.execute(
        select(User).where(or_(User.username == login.lower(), User.email == login))
    )
    user = result.scalars().first()
    if not user or not user.is_active:
        return False
    if not verify_password(password, user.hashed_password):
        return False
    return user


def _create_token(data: dict, token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire, "type": token_type})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _create_token(data, "access", expires_delta)


def create_refresh_token(data: dict, expires_delta: Optional[timedelta] = None):
    if expires_delta is None:
        expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _create_token(data, "refresh", expires_delta)


def decode_token(token: str, expected_type: str) -> str:
    """Return the username carried by a token, or raise JWTError."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != expected_type:
        raise JWTError("Invalid token type")
    username: str = payload.get("sub")
    if not username:
        raise JWTError("Invalid token payload")
    return username


def set_auth_cookies(response: Response, username: str, refresh: bool = True) -> None:
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    response.set_cookie(
        key=ACCESS_COOKIE,
        value=create_access_token(data={"sub": username}, expires_delta=access_token_expires),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        expires=int(access_token_expires.total_seconds()),
        path="/",
    )
    if not refresh:
        return

    refresh_token_expires = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=create_refresh_token(data={"sub": username}, expires_delta=refresh_token_expires),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        expires=int(refresh_token_expires.total_seconds()),
        path="/",
    )


def clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_COOKIE, path="/")
    response.delete_cookie(REFRESH_COOKIE, path="/")


def validate_password(password: str):
    errors = []
    if len(password) < 8:
        errors.append("8_characters_long")
    if not any(char.isdigit() for char in password):
        errors.append("one_digit")
    if not any(char.isupper() for char in password):
        errors.append("one_uppercase")
    if not any(char.islower() for char in password):
        errors.append("one_lowercase")
    if not any(char in "!@#$%^&*()" for char in password):
        errors.append("one_special")

    if errors:
        raise PasswordValidationError(errors)

    return True


async def _active_user(db: AsyncSession, username: str) -> User:
    result = await db.execute(select(User).where(User.username == username))
    user = result.scalars().first()
    if not user or not user.is_active:
        raise JWTError("User not found")
    return user


async def resolve_user_from_cookies(
    request: Request, response: Response, db: AsyncSession
) -> Optional[User]:
    """
    Resolve the caller from the auth cookies.

    A valid access token wins. Otherwise a valid refresh token is accepted
    and both cookies are re-issued on `response`. Returns None when neither
    token identifies an active user.
    """
    access_token = request.cookies.get(ACCESS_COOKIE)
    refresh_token = request.cookies.get(REFRESH_COOKIE)

    if access_token:
        try:
            return await _active_user(db, decode_token(access_token, "access"))
        except JWTError as e:
            logger.debug("Access token error: %s", e)

    if refresh_token:
        try:
            user = await _active_user(db, decode_token(refresh_token, "refresh"))
        except JWTError as e:
            logger.debug("Refresh token error: %s", e)
            return None
        set_auth_cookies(response, user.username)
        return user

    return None


async def get_current_user_from_cookie(
    request: Request, response: Response, db: AsyncSession = Depends(get_db)
) -> User:
    user = await resolve_user_from_cookies(request, response, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return user


async def get_optional_user_from_cookie(
    request: Request, response: Response, db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    return await resolve_user_from_cookies(request, response, db)
