# stockdesk/utils/log_parser.py
"""
Recovers sale facts from the free-text ``details`` of a sale log.

Logs written by the order endpoint carry ``quantity`` and ``order_number``
columns; older rows only have text such as ``"Sold 3 units - Order #1042"``.
Everything that reads sale quantities goes through :func:`sale_fields`, so
once :func:`backfill_sale_fields` has run against a database the regex path
is only taken for rows whose text carries no order number.
"""
import logging
import re
from typing import NamedTuple, Optional

from sqlalchemy.orm import Session

from stockdesk.models.log import SaleLog, STOCK_OUT

logger = logging.getLogger(__name__)

QUANTITY_RE = re.compile(r"Sold\s+(\d+)\s+unit", re.IGNORECASE)
ORDER_NUMBER_RE = re.compile(r"Order\s*#\s*(\d+)", re.IGNORECASE)


class SaleDetails(NamedTuple):
    quantity: int
    order_number: Optional[int]


def parse_sale_details(details: Optional[str]) -> SaleDetails:
    """Quantity defaults to 1 and order number to None when the text does not match."""
    text = details or ""
    qty_match = QUANTITY_RE.search(text)
    order_match = ORDER_NUMBER_RE.search(text)
    return SaleDetails(
        quantity=int(qty_match.group(1)) if qty_match else 1,
        order_number=int(order_match.group(1)) if order_match else None,
    )


def sale_fields(log: SaleLog) -> SaleDetails:
    """Structured columns when present, parsed text otherwise."""
    if log.quantity is not None and log.order_number is not None:
        return SaleDetails(log.quantity, log.order_number)
    parsed = parse_sale_details(log.details)
    return SaleDetails(
        quantity=log.quantity if log.quantity is not None else parsed.quantity,
        order_number=log.order_number if log.order_number is not None else parsed.order_number,
    )


def order_reference(log_id: str, order_number: Optional[int], prefix: str = "#", id_chars: int = 8) -> str:
    """'#1042' for a known order number, '#' + the start of the log id otherwise."""
    if order_number is not None:
        return f"{prefix}{order_number}"
    return f"{prefix}{str(log_id)[:id_chars].upper()}"


def format_sale_details(quantity: int, order_number: int) -> str:
    return f"Sold {quantity} unit{'s' if quantity != 1 else ''} - Order #{order_number}"


def backfill_sale_fields(db: Session) -> int:
    """Copy parsed quantity/order number into NULL columns of stock_out logs.

    Only rows with no quantity are visited. Every visited row gets one, so a
    row whose text has no order number is not selected again on later runs.
    """
    rows = (
        db.query(SaleLog)
        .filter(SaleLog.action == STOCK_OUT, SaleLog.quantity.is_(None))
        .all()
    )
    for log in rows:
        fields = sale_fields(log)
        log.quantity = fields.quantity
        if log.order_number is None:
            log.order_number = fields.order_number
    db.commit()
    logger.info("Backfilled structured sale fields on %d log rows", len(rows))
    return len(rows)
