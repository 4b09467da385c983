from typing import List, Optional

from pydantic import BaseModel, Field

from models.order import OrderStatus


class OrderItemRequest(BaseModel):
    productId: int
    quantity: int = Field(default=1, ge=1, le=1000)


class CreateOrderRequest(BaseModel):
    vendorId: int
    items: List[OrderItemRequest] = Field(min_length=1)
    notes: Optional[str] = Field(default=None, max_length=1000)


class OrderStatusRequest(BaseModel):
    status: OrderStatus
