from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

OrderStatus = Literal["new", "processing", "completed", "delivered", "cancelled", "returned"]


class OrderCreate(BaseModel):
    """
    Оформление заказа.
    user_id = None -> гостевой заказ (без бонусов и без баллов).
    """
    model_config = ConfigDict(extra="forbid")

    user_id: Optional[str] = None
    customer_name: str = Field(default="", max_length=120)
    customer_email: Optional[str] = Field(default=None, max_length=255)
    customer_phone: Optional[str] = Field(default=None, max_length=32)

    total: int = Field(..., gt=0, description="Сумма заказа (грн, целое)")
    bonus_to_use: int = Field(default=0, ge=0, description="Сколько бонусов хочет списать клиент")


class OrderStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: OrderStatus
    note: Optional[str] = Field(default=None, max_length=255)


class OrderStatusChangeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str
    note: Optional[str] = None
    date: datetime


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: Optional[str] = None
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None

    total: int
    bonus_used: int
    status: str

    created_at: datetime
    updated_at: datetime

    status_history: list[OrderStatusChangeOut] = []
