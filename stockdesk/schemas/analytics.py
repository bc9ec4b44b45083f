from pydantic import BaseModel
from typing import List, Union

from stockdesk.schemas.order import CamelModel


class AnalyticsSummary(CamelModel):
    total_revenue: float
    total_orders: int
    average_order_value: float
    top_selling_product: str
    low_stock_items: int
    revenue_growth: float


class ChartData(BaseModel):
    labels: List[str]
    data: List[Union[int, float]]


class TopProduct(BaseModel):
    name: str
    sales: int
    revenue: float
    trend: str


class Transaction(BaseModel):
    id: str
    product: str
    customer: str
    amount: float
    status: str
    date: str


class AnalyticsResponse(CamelModel):
    summary: AnalyticsSummary
    revenue_chart: ChartData
    category_chart: ChartData
    top_products: List[TopProduct]
    recent_transactions: List[Transaction]
