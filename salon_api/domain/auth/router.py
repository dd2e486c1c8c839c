"""Auth router - registration, login, token refresh and admin bootstrap"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin
from ...config import LOGIN_RATE_LIMIT, LOGIN_RATE_WINDOW_SECONDS
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from ..users.schemas import UserResponse
from .schemas import (
    AccessTokenResponse,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
)
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

login_rate_limit = create_rate_limiter(
    limit=LOGIN_RATE_LIMIT, window_seconds=LOGIN_RATE_WINDOW_SECONDS, key_prefix="login"
)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    user = service.register(data)
    return {"user": user, "message": "User registered successfully"}


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    _: None = Depends(login_rate_limit),
    service: AuthService = Depends(get_auth_service),
):
    """Exchange credentials for a 15 minute access token and a 7 day refresh token"""
    return service.login(data)


@router.post("/refresh", response_model=AccessTokenResponse)
async def refresh(data: RefreshRequest, service: AuthService = Depends(get_auth_service)):
    return service.refresh(data.refresh_token)


@router.get("/profile", response_model=UserResponse)
async def profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/create-admin", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    data: RegisterRequest,
    current_user: User = Depends(require_admin),
    service: AuthService = Depends(get_auth_service),
):
    return service.create_admin(data, current_user)
