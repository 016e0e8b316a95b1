from typing import Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.config import settings
from app.core.rate_limit import limiter
from app.services.user_service import UserService
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.schemas.responses import SuccessResponse
from app.schemas.user import UserResponse

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(
    request: Request,
    register_in: RegisterRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Register a driver and return a session token with the public profile.
    """
    user, token = await UserService.register(db, register_in)
    return AuthResponse(token=token, data=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    login_in: LoginRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Log in with national ID number and password.
    """
    token = await UserService.login(db, login_in.id_number, login_in.password)
    return AuthResponse(token=token)


@router.get("/me", response_model=SuccessResponse[UserResponse], response_model_exclude_none=True)
async def get_me(
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Profile of the authenticated user.
    """
    user = await UserService.get_current_user(db, user_id)
    return SuccessResponse(data=UserResponse.model_validate(user))
