# stockdesk/routes/items.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from stockdesk.database import get_db
from stockdesk.errors import NotFoundError
from stockdesk.models.item import Brand, Category, Item
from stockdesk.models.users import User
from stockdesk.schemas.item import ItemCreate, ItemList, ItemOut, ItemUpdate
from stockdesk.utils.audit import write_restock_log
from stockdesk.utils.tokenJWT import get_current_user, require_admin

router = APIRouter(prefix="/items", tags=["Items"])
logger = logging.getLogger(__name__)

# Columns that cannot be cleared with an explicit null
REQUIRED_FIELDS = {"name", "price", "amount"}


# ---- HELPERS ----
def _get_item(db: Session, item_id: int) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise NotFoundError("Item not found")
    return item


def _check_refs(db: Session, category_id: Optional[int], brand_id: Optional[int]) -> None:
    if category_id is not None and not db.query(Category).filter(Category.id == category_id).first():
        raise NotFoundError("Category not found")
    if brand_id is not None and not db.query(Brand).filter(Brand.id == brand_id).first():
        raise NotFoundError("Brand not found")


@router.get("", response_model=ItemList)
def list_items(
    q: Optional[str] = Query(None, description="Search by name or model"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(Item)
    if q:
        like = f"%{q}%"
        query = query.filter(or_(Item.name.ilike(like), Item.model.ilike(like)))
    return {"items": query.order_by(Item.name.asc()).all()}


@router.get("/{item_id}", response_model=ItemOut)
def get_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_item(db, item_id)


@router.post("", response_model=ItemOut, status_code=201)
def create_item(
    payload: ItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    _check_refs(db, payload.category_id, payload.brand_id)

    item = Item(**payload.model_dump())
    db.add(item)
    db.flush()
    if item.amount > 0:
        write_restock_log(db, item_id=item.id, quantity=item.amount,
                          details=f"Added {item.amount} units", commit=False)
    db.commit()
    db.refresh(item)
    logger.info("Item %s created by user %s", item.id, current_user.id)
    return item


@router.put("/{item_id}", response_model=ItemOut)
def update_item(
    item_id: int,
    payload: ItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    item = _get_item(db, item_id)
    data = payload.model_dump(exclude_unset=True)
    _check_refs(db, data.get("category_id"), data.get("brand_id"))

    old_amount = item.amount
    for field, value in data.items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        setattr(item, field, value)

    # Only increases are restocks; decreases happen through orders
    if item.amount > old_amount:
        added = item.amount - old_amount
        write_restock_log(db, item_id=item.id, quantity=added,
                          details=f"Restocked {added} units", commit=False)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}")
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    item = _get_item(db, item_id)
    db.delete(item)
    db.commit()
    logger.info("Item %s deleted by user %s", item_id, current_user.id)
    return {"success": True, "message": f"Item {item_id} deleted"}
