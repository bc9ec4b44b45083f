from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

OrderStatusValue = Literal["pending", "processing", "completed", "cancelled"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Input schema for placing an order against one item
class OrderCreatePayload(BaseModel):
    item_id: Optional[int] = None
    customer_id: Optional[int] = None
    quantity: Optional[int] = None


# An order reconstructed from a stock_out log
class OrderView(CamelModel):
    id: str
    order_number: str
    product: str
    product_id: Optional[int] = None
    quantity: int
    unit_price: float
    total_amount: float
    status: str
    customer: str
    date: str
    timestamp: str


class OrderList(BaseModel):
    orders: List[OrderView]


class OrderCreated(BaseModel):
    success: bool = True
    order: OrderView


# Schema for updating order status
class OrderStatusPatch(BaseModel):
    status: Optional[str] = Field(None, description="pending, processing, completed or cancelled")


class OrderStatusUpdated(BaseModel):
    success: bool = True
    status: OrderStatusValue
