# app/models/orders.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class OrderCreate(BaseModel):
    order_date: datetime
    table_id: Optional[str] = None


class OrderUpdate(BaseModel):
    table_id: Optional[str] = None


class OrderOut(BaseModel):
    order_id: str
    order_date: Optional[datetime] = None
    table_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
