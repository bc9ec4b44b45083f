# stockdesk/routes/catalog.py
from typing import List, Type

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from stockdesk.database import get_db
from stockdesk.errors import ValidationError
from stockdesk.models.item import Brand, Category
from stockdesk.models.users import User
from stockdesk.schemas.item import BrandOut, CategoryOut, NameCreate
from stockdesk.utils.tokenJWT import get_current_user, require_admin

router = APIRouter(tags=["Catalog"])


def _create_named(db: Session, model: Type, name: str, label: str):
    name = name.strip()
    if not name:
        raise ValidationError(f"{label} name is required")
    exists = db.query(model).filter(func.lower(model.name) == name.lower()).first()
    if exists:
        raise ValidationError(f"{label} already exists")
    row = model(name=name)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return db.query(Category).order_by(Category.name.asc()).all()


@router.post("/categories", response_model=CategoryOut, status_code=201)
def create_category(payload: NameCreate, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return _create_named(db, Category, payload.name, "Category")


@router.get("/brands", response_model=List[BrandOut])
def list_brands(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return db.query(Brand).order_by(Brand.name.asc()).all()


@router.post("/brands", response_model=BrandOut, status_code=201)
def create_brand(payload: NameCreate, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return _create_named(db, Brand, payload.name, "Brand")
