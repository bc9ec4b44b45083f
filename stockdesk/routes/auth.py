# stockdesk/routes/auth.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from stockdesk.config import Settings
from stockdesk.database import get_db
from stockdesk.errors import AuthError, ForbiddenError, ValidationError
from stockdesk.models.users import User
from stockdesk.schemas import user as schemas
from stockdesk.utils.hashing import get_password_hash, verify_password
from stockdesk.utils.tokenJWT import create_access_token, get_settings

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)

ROLES = {"admin", "staff"}


# Register a new user
@router.post("/register", response_model=schemas.UserEnvelope, status_code=201)
def register(payload: schemas.UserCreate, db: Session = Depends(get_db)):
    normalized_email = payload.email.strip().lower()
    role = (payload.role or "staff").lower()
    if role not in ROLES:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(sorted(ROLES))}")
    # Only the first account on an empty database may register as admin
    if role == "admin" and db.query(User).first() is not None:
        logger.warning("Rejected self-registration as admin for %s", normalized_email)
        raise ForbiddenError("Admin accounts cannot be self-registered")

    if db.query(User).filter(func.lower(User.email) == normalized_email).first():
        raise ValidationError("Email already registered")
    if payload.username and db.query(User).filter(User.username == payload.username).first():
        raise ValidationError("Username already taken")

    new_user = User(
        email=normalized_email, username=payload.username, fullname=payload.fullname,
        password_hash=get_password_hash(payload.password), role=role,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("Registered user %s with role %s", new_user.id, new_user.role)
    return {"user": new_user}


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.Token)
def login(
    payload: schemas.UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    db_user = db.query(User).filter(func.lower(User.email) == payload.email.strip().lower()).first()
    if not db_user or not verify_password(payload.password, db_user.password_hash):
        logger.warning("Failed login for %s", payload.email)
        raise AuthError("Invalid credentials")

    access_token = create_access_token(settings, data={"sub": db_user.email, "role": db_user.role})
    return {"access_token": access_token, "token_type": "bearer", "user": db_user}
