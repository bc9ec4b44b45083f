# stockdesk/routes/analytics.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stockdesk.config import Settings
from stockdesk.database import get_db
from stockdesk.errors import ValidationError
from stockdesk.models.item import Item
from stockdesk.models.log import SaleLog, STOCK_OUT
from stockdesk.models.users import User
from stockdesk.schemas.analytics import AnalyticsResponse
from stockdesk.utils.csv_export import ANALYTICS_HEADERS, build_csv, csv_attachment
from stockdesk.utils.log_parser import order_reference
from stockdesk.utils import metrics
from stockdesk.utils.time_utils import utcnow
from stockdesk.utils.tokenJWT import get_current_user, get_settings, is_admin, require_admin

router = APIRouter(prefix="/analytics", tags=["Analytics"])

RECENT_TRANSACTIONS_LIMIT = 10


def _check_period(period: Optional[str]) -> str:
    period = period or metrics.DEFAULT_PERIOD
    if period not in metrics.PERIODS:
        raise ValidationError(f"Invalid period. Must be one of: {', '.join(metrics.PERIODS)}")
    return period


def _sales_between(db: Session, start: datetime, end: datetime) -> List[metrics.SaleRecord]:
    logs = (
        db.query(SaleLog)
        .filter(SaleLog.action == STOCK_OUT, SaleLog.timestamp >= start, SaleLog.timestamp < end)
        .order_by(SaleLog.timestamp.desc())
        .all()
    )
    return [metrics.sale_record_from_log(log) for log in logs]


@router.get("", response_model=AnalyticsResponse)
def get_analytics(
    period: Optional[str] = Query(metrics.DEFAULT_PERIOD, description="7days, 30days or 90days"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_user),
):
    period = _check_period(period)
    now = utcnow()
    start, previous_start = metrics.period_window(period, now)

    records = _sales_between(db, start, now)
    previous = _sales_between(db, previous_start, start)
    items = db.query(Item).all()

    top_products = metrics.rank_products(records, previous)
    summary = metrics.summarize(records)
    summary.update({
        "topSellingProduct": top_products[0]["name"] if top_products else "N/A",
        "lowStockItems": sum(1 for i in items if (i.amount or 0) < settings.LOW_STOCK_THRESHOLD),
        "revenueGrowth": metrics.revenue_growth(summary["totalRevenue"], metrics.total_revenue(previous)),
    })

    transactions = []
    if is_admin(current_user):
        transactions = [
            {
                "id": order_reference(r.id, r.order_number, prefix="TRX-", id_chars=6),
                "product": r.product,
                "customer": r.customer or "Walk-in",
                "amount": r.revenue,
                "status": r.status,
                "date": r.timestamp.date().isoformat(),
            }
            for r in records[:RECENT_TRANSACTIONS_LIMIT]
        ]

    return {
        "summary": summary,
        "revenueChart": metrics.revenue_chart(records, period, now),
        "categoryChart": metrics.category_distribution([i.category.name if i.category else None for i in items]),
        "topProducts": top_products,
        "recentTransactions": transactions,
    }


@router.get("/export")
def export_analytics(
    period: Optional[str] = Query(metrics.DEFAULT_PERIOD),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    period = _check_period(period)
    now = utcnow()
    start, _ = metrics.period_window(period, now)

    rows = [
        [
            r.timestamp.date().isoformat(), r.product, r.brand or "N/A", r.category or "N/A",
            r.quantity, r.price, r.revenue, order_reference(r.id, r.order_number),
        ]
        for r in _sales_between(db, start, now)
    ]
    filename = f"sales-report-{period}-{now.date().isoformat()}.csv"
    return csv_attachment(build_csv(ANALYTICS_HEADERS, rows), filename)
