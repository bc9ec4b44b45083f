# stockdesk/routes/orders.py
import logging
import random
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockdesk.database import get_db
from stockdesk.errors import NotFoundError, ValidationError
from stockdesk.models.customer import Customer
from stockdesk.models.item import Item
from stockdesk.models.log import SaleLog, STOCK_OUT
from stockdesk.models.order_status import OrderStatus, ORDER_STATUSES, DEFAULT_ORDER_STATUS
from stockdesk.models.users import User
from stockdesk.schemas.order import (
    OrderCreatePayload, OrderCreated, OrderList, OrderStatusPatch, OrderStatusUpdated, OrderView,
)
from stockdesk.utils.audit import write_log
from stockdesk.utils.csv_export import ORDERS_HEADERS, build_csv, csv_attachment
from stockdesk.utils.log_parser import format_sale_details, order_reference
from stockdesk.utils.metrics import SaleRecord, sale_record_from_log
from stockdesk.utils.time_utils import to_utc_z, utcnow
from stockdesk.utils.tokenJWT import get_current_user, require_admin

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger(__name__)


def _new_order_number() -> int:
    return 1000 + random.randint(0, 8999)


def _sale_logs(db: Session) -> List[SaleLog]:
    return (
        db.query(SaleLog)
        .filter(SaleLog.action == STOCK_OUT)
        .order_by(SaleLog.timestamp.desc())
        .all()
    )


# Map a stock_out log to the OrderView schema
def _order_to_out(log: SaleLog) -> OrderView:
    record: SaleRecord = sale_record_from_log(log)
    return OrderView(
        id=log.id,
        order_number=order_reference(log.id, record.order_number),
        product=record.product,
        product_id=log.item_id,
        quantity=record.quantity,
        unit_price=record.price,
        total_amount=record.revenue,
        status=record.status,
        customer=record.customer or "Walk-in",
        date=log.timestamp.date().isoformat(),
        timestamp=to_utc_z(log.timestamp),
    )


@router.get("", response_model=OrderList)
def list_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"orders": [_order_to_out(log) for log in _sale_logs(db)]}


# Place an order: stock check, conditional decrement and sale log in one transaction
@router.post("", response_model=OrderCreated, status_code=201)
def create_order(
    payload: OrderCreatePayload,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if payload.item_id is None or payload.customer_id is None or payload.quantity is None:
        raise ValidationError("item_id, customer_id and quantity are required")
    quantity = payload.quantity
    if quantity < 1:
        raise ValidationError("Quantity must be at least 1")

    item = db.query(Item).filter(Item.id == payload.item_id).first()
    if not item:
        raise NotFoundError("Item not found")
    customer = db.query(Customer).filter(Customer.id == payload.customer_id).first()
    if not customer:
        raise NotFoundError("Customer not found")

    if item.amount < quantity:
        logger.warning("Order rejected: item %s has %s units, %s requested", item.id, item.amount, quantity)
        raise ValidationError(f"Insufficient stock. Available: {item.amount}")

    # Decrement only while enough stock remains; a concurrent order that got
    # there first leaves zero rows matched
    result = db.execute(
        update(Item)
        .where(Item.id == item.id, Item.amount >= quantity)
        .values(amount=Item.amount - quantity)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        logger.warning("Order rejected: stock for item %s changed concurrently", item.id)
        raise ValidationError("Insufficient stock")

    order_number = _new_order_number()
    try:
        log = write_log(
            db, item_id=item.id, customer_id=customer.id, action=STOCK_OUT,
            details=format_sale_details(quantity, order_number),
            quantity=quantity, order_number=order_number, unit_price=item.price, commit=False,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(log)
    logger.info("Order #%s created: %s x item %s for customer %s", order_number, quantity, item.id, customer.id)
    return {"success": True, "order": _order_to_out(log)}


@router.patch("/{order_id}/status", response_model=OrderStatusUpdated)
def update_order_status(
    order_id: str,
    payload: OrderStatusPatch,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    new_status = (payload.status or "").strip().lower()
    if new_status not in ORDER_STATUSES:
        raise ValidationError(f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}")

    log = db.query(SaleLog).filter(SaleLog.id == order_id, SaleLog.action == STOCK_OUT).first()
    if not log:
        raise NotFoundError("Order not found")

    # Last writer wins
    log_id, user_id = log.id, current_user.id
    row = log.order_status
    old_status = row.status if row else None
    if row is None:
        row = OrderStatus(log_id=log_id)
        log.order_status = row
    row.status = new_status
    row.updated_by = user_id
    row.updated_at = utcnow()
    try:
        db.commit()
    except IntegrityError:
        # A concurrent first update inserted the row; overwrite it instead
        db.rollback()
        db.query(OrderStatus).filter(OrderStatus.log_id == log_id).update(
            {OrderStatus.status: new_status, OrderStatus.updated_by: user_id, OrderStatus.updated_at: utcnow()},
            synchronize_session=False,
        )
        db.commit()

    logger.info("Order %s status %s -> %s by user %s", log_id, old_status or DEFAULT_ORDER_STATUS, new_status, user_id)
    return {"success": True, "status": new_status}


@router.get("/export")
def export_orders(
    status: Optional[str] = Query("all", description="all or a single order status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    status = (status or "all").lower()
    if status != "all" and status not in ORDER_STATUSES:
        raise ValidationError(f"Invalid status. Must be one of: all, {', '.join(ORDER_STATUSES)}")

    orders = [_order_to_out(log) for log in _sale_logs(db)]
    if status != "all":
        orders = [o for o in orders if o.status == status]

    rows = [
        [o.order_number, o.date, o.product, o.quantity, o.unit_price, o.total_amount, o.status]
        for o in orders
    ]
    filename = f"orders-{status}-{utcnow().date().isoformat()}.csv"
    return csv_attachment(build_csv(ORDERS_HEADERS, rows), filename)
