# stockdesk/models/order_status.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from stockdesk.database import Base
from stockdesk.utils.time_utils import utcnow

ORDER_STATUSES = ("pending", "processing", "completed", "cancelled")
DEFAULT_ORDER_STATUS = "completed"


# Status of a derived order, keyed by the stock_out log it came from.
# No row means the order is completed.
class OrderStatus(Base):
    __tablename__ = "order_statuses"

    log_id = Column(String(36), ForeignKey("sale_logs.id", ondelete="CASCADE"), primary_key=True)
    status = Column(String(20), nullable=False, default=DEFAULT_ORDER_STATUS)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    updated_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
