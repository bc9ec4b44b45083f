# stockdesk/models/log.py
import uuid

from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from stockdesk.database import Base
from stockdesk.utils.time_utils import utcnow

STOCK_IN = "stock_in"
STOCK_OUT = "stock_out"


def _new_id() -> str:
    return str(uuid.uuid4())


# Append-only record of an inventory-affecting action.
# `details` is free text ("Sold 3 units - Order #1042"); `quantity` and
# `order_number` hold the same facts structurally and are NULL on rows
# written before they existed. item_id becomes NULL once the item is deleted;
# the row itself is never removed.
class SaleLog(Base):
    __tablename__ = "sale_logs"

    id = Column(String(36), primary_key=True, default=_new_id)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="SET NULL"), nullable=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    action = Column(String(20), nullable=False, index=True)
    timestamp = Column(DateTime, nullable=False, default=utcnow, index=True)
    details = Column(String, nullable=True)

    quantity = Column(Integer, nullable=True)
    order_number = Column(Integer, nullable=True)
    # Price at the time of sale; NULL on legacy rows, which fall back to the item price
    unit_price = Column(Float, nullable=True)

    item = relationship("Item", back_populates="logs", lazy="joined")
    customer = relationship("Customer", lazy="joined")
    order_status = relationship(
        "OrderStatus", uselist=False, lazy="joined", cascade="all, delete-orphan"
    )
