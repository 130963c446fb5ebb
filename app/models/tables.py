# app/models/tables.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TableCreate(BaseModel):
    number_of_guests: int = Field(..., ge=1)
    table_number: int


class TableUpdate(BaseModel):
    number_of_guests: Optional[int] = Field(None, ge=1)
    table_number: Optional[int] = None


class TableOut(BaseModel):
    table_id: str
    table_number: Optional[int] = None
    number_of_guests: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
