# stockdesk/utils/audit.py
from typing import Optional

from sqlalchemy.orm import Session

from stockdesk.models.log import SaleLog, STOCK_IN


def write_log(
    db: Session, *, item_id: int, action: str, details: str,
    customer_id: Optional[int] = None, quantity: Optional[int] = None,
    order_number: Optional[int] = None, unit_price: Optional[float] = None,
    commit: bool = True,
) -> SaleLog:
    entry = SaleLog(
        item_id=item_id, customer_id=customer_id, action=action, details=details,
        quantity=quantity, order_number=order_number, unit_price=unit_price,
    )
    db.add(entry)
    if commit:
        db.commit()
    return entry


def write_restock_log(db: Session, *, item_id: int, quantity: int, details: str, commit: bool = True) -> SaleLog:
    return write_log(db, item_id=item_id, action=STOCK_IN, details=details, quantity=quantity, commit=commit)
