import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import User, UserRole
from .security_utils import decode_access_token

logger = logging.getLogger(__name__)

# auto_error disabled so a missing header is reported as 401, not 403
security = HTTPBearer(auto_error=False)


def _user_from_token(token: str, db: Session) -> User:
    payload = decode_access_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token payload") from None

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        logger.warning(f"🚫 Token for unknown or inactive user_id: {user_id}")
        raise HTTPException(status_code=401, detail="User not found or inactive")

    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer access token to an active user"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )
    return _user_from_token(credentials.credentials, db)


def require_roles(*roles: UserRole):
    """
    Build a dependency that only lets users with one of the given roles through.

    Example usage:
        @router.post("/create-admin")
        async def create_admin(current_user: User = Depends(require_roles(UserRole.ADMIN))):
            ...
    """
    allowed = {role.value for role in roles}

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            logger.warning(f"🚫 User {current_user.id} with role {current_user.role} denied")
            raise HTTPException(status_code=403, detail="You do not have permission to perform this action")
        return current_user

    return role_checker


require_admin = require_roles(UserRole.ADMIN)
