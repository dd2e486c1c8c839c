"""
Password hashing and JWT helpers
Access and refresh tokens are signed with distinct secrets
"""

import logging
from datetime import timedelta
from typing import Any, Optional

from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    JWT_ALGORITHM,
    JWT_SECRET,
    REFRESH_TOKEN_EXPIRE_DAYS,
    REFRESH_TOKEN_SECRET,
)
from .shared.dates import utcnow

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password_bcrypt(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password_bcrypt(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# JWT TOKENS
# ============================================================================


def create_jwt_token(data: dict[str, Any], secret: str, expires_delta: timedelta) -> str:
    """Create a signed JWT with an exp claim"""
    to_encode = data.copy()
    to_encode["exp"] = utcnow() + expires_delta
    return jose_jwt.encode(to_encode, secret, algorithm=JWT_ALGORITHM)


def verify_jwt_token(token: str, secret: str) -> Optional[dict[str, Any]]:
    """Decode and verify a JWT. Returns None if invalid or expired"""
    try:
        return jose_jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


def create_access_token(user_id: int, email: str, role: str) -> str:
    # sub must be a string for python-jose claim validation
    payload = {"sub": str(user_id), "email": email, "role": role, "type": "access"}
    return create_jwt_token(payload, JWT_SECRET, timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(user_id: int) -> str:
    payload = {"sub": str(user_id), "type": "refresh"}
    return create_jwt_token(payload, REFRESH_TOKEN_SECRET, timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))


def decode_access_token(token: str) -> Optional[dict[str, Any]]:
    payload = verify_jwt_token(token, JWT_SECRET)
    if not payload or payload.get("type") != "access":
        return None
    return payload


def decode_refresh_token(token: str) -> Optional[dict[str, Any]]:
    payload = verify_jwt_token(token, REFRESH_TOKEN_SECRET)
    if not payload or payload.get("type") != "refresh":
        return None
    return payload
