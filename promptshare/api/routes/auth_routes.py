# promptshare/api/routes/auth_routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Response, Request, Cookie
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from promptshare.core.dependencies import rate_limit_register
from promptshare.data.database import get_db
from promptshare.models.auth_models import (
    PasswordValidationError,
    ValidationError,
    UserCreate,
    UserResponse,
    LoginRequest
)
from promptshare.services.auth_services import (
    authenticate_user,
    clear_auth_cookies,
    decode_token,
    get_current_user_from_cookie,
    hash_password,
    set_auth_cookies,
    validate_password,
)
from promptshare.models.database_models.user import User
from promptshare.services.database.user_database_services import create_user, get_user_by_username
from email_validator import EmailNotValidError, validate_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/register", dependencies=[Depends(rate_limit_register)])
async def register(user_data: UserCreate, request: Request, db: AsyncSession = Depends(get_db)):
    """Register a new user."""
    logger.debug("Register request from origin %s", request.headers.get("origin"))

    try:
        validate_password(user_data.password)
    except PasswordValidationError as e:
        errors = []
        for error_message in e.messages:
            errors.append(ValidationError(loc=["password"], msg=error_message, type="value_error.password"))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[error.model_dump() for error in errors]
        )

    try:
        validate_email(user_data.email, check_deliverability=False)
    except EmailNotValidError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        hashed_password = hash_password(user_data.password)
        user = await create_user(
            db, user_data.username, user_data.email, hashed_password, user_data.display_name
        )
    except ValueError as e:
        if "Username already taken" in str(e):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
        elif "Email already registered" in str(e):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
        else:
            raise HTTPException(status_code=500, detail=f"Database error: {e}")

    logger.info("Registered user %s", user.id)
    return {"success": True, "message": "User registered successfully", "user_id": user.id}


@router.post("/login")
async def login(
    login_data: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)
):
    """Login a user and set access and refresh tokens as HTTP-only cookies."""
    user = await authenticate_user(db, login_data.username, login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
        )

    set_auth_cookies(response, user.username)
    return {"success": True, "message": "Logged in successfully"}


@router.post("/logout")
async def logout(response: Response):
    """Logout a user (delete the cookies)."""
    clear_auth_cookies(response)
    return {"message": "Successfully logged out", "success": True}


@router.get("/check-auth", response_model=UserResponse)
async def check_auth(user: User = Depends(get_current_user_from_cookie)):
    """Return the authenticated user."""
    return user


@router.post("/refresh")
async def refresh_token_route(
    response: Response,
    refresh_token: str | None = Cookie(default=None),
    db: AsyncSession = Depends(get_db),
):
    """
    Refreshes the access token using the refresh token (provided as a cookie).
    Sets a new access token cookie.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate refresh token",
    )
    if refresh_token is None:
        raise credentials_exception

    try:
        username = decode_token(refresh_token, "refresh")
    except JWTError:
        raise credentials_exception

    user = await get_user_by_username(db, username)
    if user is None or not user.is_active:
        raise credentials_exception

    set_auth_cookies(response, user.username, refresh=False)
    return {"success": True, "message": "Access token refreshed"}
