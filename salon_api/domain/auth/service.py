"""Auth service - registration, login and token refresh"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User, UserRole
from ...security_utils import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password_bcrypt,
    verify_password_bcrypt,
)
from ..users.repository import UserRepository
from .schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Service layer for authentication"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def _create_account(self, data: RegisterRequest, role: UserRole) -> User:
        if self.repo.get_user_by_email(self.db, data.email):
            logger.warning(f"⚠️ Registration rejected, email already in use: {data.email}")
            raise HTTPException(status_code=409, detail="Email already in use! Please try with a diff email")

        return self.repo.create_user(
            self.db,
            with_customer_profile=role == UserRole.CUSTOMER,
            email=data.email,
            name=data.name.strip(),
            password=hash_password_bcrypt(data.password),
            phone=data.phone,
            role=role.value,
        )

    def register(self, data: RegisterRequest) -> User:
        """Create a customer account with a free-tier customer profile"""
        user = self._create_account(data, UserRole.CUSTOMER)
        logger.info(f"✅ Registered user {user.id}")
        return user

    def create_admin(self, data: RegisterRequest, created_by: User) -> User:
        user = self._create_account(data, UserRole.ADMIN)
        logger.info(f"👑 Admin {created_by.id} created admin user {user.id}")
        return user

    def login(self, data: LoginRequest) -> dict:
        user = self.repo.get_user_by_email(self.db, data.email)
        if not user or not user.is_active or not verify_password_bcrypt(data.password, user.password):
            logger.warning(f"🚫 Failed login for {data.email}")
            raise HTTPException(status_code=401, detail="Invalid credentials or account not exists")

        logger.info(f"🔑 User {user.id} logged in")
        return {
            "user": user,
            "access_token": create_access_token(user.id, user.email, user.role),
            "refresh_token": create_refresh_token(user.id),
        }

    def refresh(self, refresh_token: str) -> dict:
        payload = decode_refresh_token(refresh_token)
        if not payload:
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token") from None

        user = self.repo.get_user_by_id(self.db, user_id)
        if not user or not user.is_active:
            raise HTTPException(status_code=401, detail="User not found or inactive")

        return {"access_token": create_access_token(user.id, user.email, user.role)}
