from stockdesk.models.users import User
from stockdesk.models.item import Brand, Category, Item
from stockdesk.models.customer import Customer
from stockdesk.models.log import SaleLog, STOCK_IN, STOCK_OUT
from stockdesk.models.order_status import OrderStatus, ORDER_STATUSES, DEFAULT_ORDER_STATUS

__all__ = [
    "User", "Brand", "Category", "Item", "Customer",
    "SaleLog", "STOCK_IN", "STOCK_OUT",
    "OrderStatus", "ORDER_STATUSES", "DEFAULT_ORDER_STATUS",
]
