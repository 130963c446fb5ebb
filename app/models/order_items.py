# app/models/order_items.py

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Quantity = Literal["S", "M", "L"]


class OrderItemCreate(BaseModel):
    quantity: Quantity
    unit_price: float = Field(..., ge=0, allow_inf_nan=False)
    food_id: str


class OrderItemPack(BaseModel):
    """A new order for `table_id` together with its line items."""

    table_id: Optional[str] = None
    order_items: List[OrderItemCreate] = Field(..., min_length=1)


class OrderItemUpdate(BaseModel):
    quantity: Optional[Quantity] = None
    unit_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    food_id: Optional[str] = None


class OrderItemOut(BaseModel):
    order_item_id: str
    quantity: Optional[str] = None
    unit_price: Optional[float] = None
    food_id: Optional[str] = None
    order_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrderItemPackOut(BaseModel):
    order_id: str
    order_item_ids: List[str]


class OrderLine(BaseModel):
    """One order item joined with its food and table."""

    amount: Optional[float] = None
    food_name: Optional[str] = None
    food_image: Optional[str] = None
    table_number: Optional[int] = None
    table_id: Optional[str] = None
    order_id: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[str] = None


class OrderView(BaseModel):
    payment_due: float
    total_count: int
    table_number: Optional[int] = None
    order_items: List[OrderLine]
