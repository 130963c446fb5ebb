# app/models/foods.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FoodCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    food_image: str
    menu_id: str


class FoodUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    food_image: Optional[str] = None
    menu_id: Optional[str] = None


class FoodOut(BaseModel):
    food_id: str
    name: Optional[str] = None
    price: Optional[float] = None
    food_image: Optional[str] = None
    menu_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
