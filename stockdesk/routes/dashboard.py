# stockdesk/routes/dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockdesk.database import get_db
from stockdesk.models.customer import Customer
from stockdesk.models.item import Item
from stockdesk.models.log import SaleLog, STOCK_OUT
from stockdesk.models.users import User
from stockdesk.schemas.dashboard import DashboardResponse
from stockdesk.utils import metrics
from stockdesk.utils.time_utils import time_ago, utcnow
from stockdesk.utils.tokenJWT import get_current_user

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

ACTIVITY_LIMIT = 5
ACTIVE_STATUSES = {"pending", "processing"}


def _money(value: float) -> str:
    return f"${value:,.0f}"


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    sales = [
        metrics.sale_record_from_log(log)
        for log in db.query(SaleLog).filter(SaleLog.action == STOCK_OUT).all()
    ]

    stats = [
        {"title": "Total Products", "value": db.query(Item).count(), "icon": "package", "color": "#f59e0b"},
        {"title": "Total Sales", "value": _money(metrics.total_revenue(sales)),
         "icon": "badge-dollar-sign", "color": "#10b981"},
        {"title": "Active Orders", "value": sum(1 for s in sales if s.status in ACTIVE_STATUSES),
         "icon": "shopping-cart", "color": "#3b82f6"},
        {"title": "Customers", "value": db.query(Customer).count(), "icon": "users", "color": "#8b5cf6"},
    ]

    now = utcnow()
    recent = db.query(SaleLog).order_by(SaleLog.timestamp.desc()).limit(ACTIVITY_LIMIT).all()
    activities = [
        {
            "id": log.id,
            "description": log.details or log.action,
            "timestamp": time_ago(log.timestamp, now),
            "type": "order" if log.action == STOCK_OUT else "inventory",
        }
        for log in recent
    ]

    return {"stats": stats, "activities": activities}
