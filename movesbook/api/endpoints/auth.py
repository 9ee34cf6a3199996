from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from movesbook.core.config import settings
from movesbook.db.async_session import get_async_db
from movesbook.schemas.auth import LoginResponse, UserLogin
from movesbook.services.async_auth import AsyncAuthService
from movesbook.services.errors import Unauthorized
from movesbook.utils.logger import auth_logger

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(login_data: UserLogin, db: AsyncSession = Depends(get_async_db)) -> Any:
    """
    Authenticate a user with email and password and return a bearer token.
    """
    user = await AsyncAuthService.authenticate(db, login_data.email, login_data.password)
    if user is None:
        auth_logger.warning("Failed login attempt", context="LOGIN", email=login_data.email)
        raise Unauthorized("Incorrect email or password")

    access_token = AsyncAuthService.create_access_token(user.id, role=user.role.value)
    await AsyncAuthService.update_last_login(db, user.id)
    auth_logger.success(f"User logged in: {user.id}", context="LOGIN")

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user_id=str(user.id),
    )
