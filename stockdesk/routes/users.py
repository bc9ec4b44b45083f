# stockdesk/routes/users.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from stockdesk.database import get_db
from stockdesk.errors import ValidationError
from stockdesk.models.users import User
from stockdesk.schemas.user import PasswordChange, UserEnvelope, UserUpdate
from stockdesk.utils.hashing import get_password_hash, verify_password
from stockdesk.utils.tokenJWT import get_current_user

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


# Retrieve current authenticated user details
@router.get("/me", response_model=UserEnvelope)
def me(current_user: User = Depends(get_current_user)):
    return {"user": current_user}


@router.put("/me", response_model=UserEnvelope)
def update_me(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = payload.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in data:
        data["email"] = data["email"].strip().lower()
        taken = db.query(User).filter(func.lower(User.email) == data["email"], User.id != current_user.id).first()
        if taken:
            raise ValidationError("Email already registered")
    if "username" in data:
        taken = db.query(User).filter(User.username == data["username"], User.id != current_user.id).first()
        if taken:
            raise ValidationError("Username already taken")

    for field, value in data.items():
        setattr(current_user, field, value)
    db.commit()
    db.refresh(current_user)
    return {"user": current_user}


@router.put("/me/password")
def change_password(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not verify_password(payload.current_password, current_user.password_hash):
        logger.warning("Password change rejected for user %s", current_user.id)
        raise ValidationError("Current password is incorrect")

    current_user.password_hash = get_password_hash(payload.new_password)
    db.commit()
    logger.info("Password changed for user %s", current_user.id)
    return {"success": True, "message": "Password updated"}
