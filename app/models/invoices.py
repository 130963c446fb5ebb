# app/models/invoices.py

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from app.models.order_items import OrderLine

PaymentMethod = Literal["CARD", "CASH", ""]
PaymentStatus = Literal["PENDING", "PAID"]


class InvoiceCreate(BaseModel):
    order_id: str
    payment_method: Optional[PaymentMethod] = None
    payment_status: Optional[PaymentStatus] = None


class InvoiceUpdate(BaseModel):
    payment_method: Optional[PaymentMethod] = None
    payment_status: Optional[PaymentStatus] = None


class InvoiceOut(BaseModel):
    invoice_id: str
    order_id: Optional[str] = None
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    payment_due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InvoiceView(BaseModel):
    invoice_id: str
    payment_method: str
    order_id: Optional[str] = None
    payment_status: Optional[str] = None
    payment_due: Optional[float] = None
    table_number: Optional[int] = None
    payment_due_date: Optional[datetime] = None
    order_details: Optional[List[OrderLine]] = None
