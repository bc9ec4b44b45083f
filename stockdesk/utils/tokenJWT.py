# stockdesk/utils/tokenJWT.py
import logging
from datetime import timedelta
from typing import Optional

from jose import jwt, JWTError
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from stockdesk.config import Settings
from stockdesk.database import get_db
from stockdesk.errors import AuthError, ForbiddenError
from stockdesk.models.users import User
from stockdesk.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

# Missing headers are reported by get_current_user, not by the scheme
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# Generate a new JWT access token
def create_access_token(settings: Settings, data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# Retrieve the currently authenticated user based on the bearer token
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing token")

    try:
        payload = jwt.decode(credentials.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        logger.warning("Rejected bearer token")
        raise AuthError("Invalid or expired token")

    email = payload.get("sub")
    if email is None:
        raise AuthError("Invalid or expired token")

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise AuthError("User not found")
    return user


def is_admin(user: User) -> bool:
    return (user.role or "").lower() == "admin"


# Dependency factory for role-based access control
def role_required(*allowed_roles):
    allowed = {r.lower() for r in allowed_roles}

    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if allowed and (current_user.role or "").lower() not in allowed:
            raise ForbiddenError("Admin access required" if allowed == {"admin"} else "Forbidden")
        return current_user
    return _checker


require_admin = role_required("admin")
