# stockdesk/utils/metrics.py
"""
Sales metrics folded from sale-log records.

All functions are pure: they take already-fetched :class:`SaleRecord`
values (one per ``stock_out`` log, price taken from the joined item, or
from the price recorded on the log once the item is deleted) and
return plain dicts/lists ready for JSON.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from stockdesk.models.log import SaleLog
from stockdesk.models.order_status import DEFAULT_ORDER_STATUS
from stockdesk.utils.log_parser import sale_fields

PERIODS = {"7days": 7, "30days": 30, "90days": 90}
DEFAULT_PERIOD = "7days"
WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
TOP_PRODUCTS_LIMIT = 5


@dataclass
class SaleRecord:
    id: str
    timestamp: datetime
    quantity: int
    price: float
    product: str
    order_number: Optional[int] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    customer: Optional[str] = None
    status: str = DEFAULT_ORDER_STATUS

    @property
    def revenue(self) -> float:
        return self.price * self.quantity


def sale_record_from_log(log: SaleLog) -> SaleRecord:
    fields = sale_fields(log)
    item = log.item
    return SaleRecord(
        id=log.id,
        timestamp=log.timestamp,
        quantity=fields.quantity,
        price=float(item.price or 0) if item else float(log.unit_price or 0),
        product=item.name if item else "Deleted item",
        order_number=fields.order_number,
        brand=item.brand.name if item and item.brand else None,
        category=item.category.name if item and item.category else None,
        customer=log.customer.name if log.customer else None,
        status=log.order_status.status if log.order_status else DEFAULT_ORDER_STATUS,
    )


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def period_window(period: str, now: datetime):
    """(start, previous_start) for a period; the previous window ends at start."""
    days = PERIODS[period]
    start = now - timedelta(days=days)
    return start, start - timedelta(days=days)


def total_revenue(records: Iterable[SaleRecord]) -> float:
    return sum(r.revenue for r in records)


def summarize(records: Sequence[SaleRecord]) -> Dict[str, float]:
    revenue = total_revenue(records)
    orders = len(records)
    return {
        "totalRevenue": revenue,
        "totalOrders": orders,
        "averageOrderValue": revenue / orders if orders else 0,
    }


def _group_by_product(records: Iterable[SaleRecord]) -> Dict[str, Dict[str, float]]:
    grouped: Dict[str, Dict[str, float]] = {}
    for r in records:
        entry = grouped.setdefault(r.product, {"sales": 0, "revenue": 0.0})
        entry["sales"] += r.quantity
        entry["revenue"] += r.revenue
    return grouped


def rank_products(
    records: Sequence[SaleRecord],
    previous: Sequence[SaleRecord] = (),
    limit: int = TOP_PRODUCTS_LIMIT,
) -> List[dict]:
    current = _group_by_product(records)
    before = _group_by_product(previous)
    ranked = sorted(current.items(), key=lambda kv: kv[1]["revenue"], reverse=True)[:limit]
    return [
        {
            "name": name,
            "sales": stats["sales"],
            "revenue": stats["revenue"],
            "trend": "up" if stats["revenue"] >= before.get(name, {}).get("revenue", 0) else "down",
        }
        for name, stats in ranked
    ]


def revenue_chart(records: Iterable[SaleRecord], period: str, now: datetime) -> dict:
    if period == "7days":
        # One slot per weekday; the same weekday in different weeks shares a slot
        data = [0.0] * 7
        for r in records:
            data[r.timestamp.weekday()] += r.revenue
        return {"labels": list(WEEKDAY_LABELS), "data": data}

    if period == "30days":
        slots, slot_days, label = 4, 7, "Week"
    else:
        slots, slot_days, label = 3, 30, "Month"

    data = [0.0] * slots
    for r in records:
        days_ago = (now - r.timestamp).days
        index = days_ago // slot_days
        if 0 <= index < slots:
            data[index] += r.revenue
    # index 0 is the newest slot; present oldest first
    data.reverse()
    return {"labels": [f"{label} {i + 1}" for i in range(slots)], "data": data}


def category_distribution(category_names: Sequence[Optional[str]]) -> dict:
    """
    Share of items per category name, in percent of all items.

    ``category_names`` has one entry per item (None when uncategorized), so
    uncategorized items shrink every share instead of getting a slice.
    """
    total = len(category_names)
    counts: Dict[str, int] = {}
    for name in category_names:
        if name:
            counts[name] = counts.get(name, 0) + 1
    labels = list(counts)
    data = [int(round_half_up(counts[n] / total * 100)) for n in labels] if total else []
    return {"labels": labels, "data": data}


def revenue_growth(current: float, previous: float) -> float:
    if not previous:
        return 0
    return round_half_up((current - previous) / previous * 100, 1)
