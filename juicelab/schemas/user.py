from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DeliveryMethod = Literal["courier", "post", "pickup"]
PaymentMethod = Literal["card", "cash"]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRegister(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    name: str = Field(..., min_length=1, max_length=120)
    password: str = Field(..., min_length=6, max_length=128)
    phone: str | None = Field(default=None, max_length=32)
    referral_code: str | None = Field(default=None, max_length=16)


class UserLogin(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=32)
    city: str | None = Field(default=None, max_length=120)
    address: str | None = Field(default=None, max_length=255)

    saved_delivery_method: DeliveryMethod | None = None
    saved_delivery_city: str | None = Field(default=None, max_length=120)
    saved_delivery_address: str | None = Field(default=None, max_length=255)
    saved_payment_method: PaymentMethod | None = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: str | None) -> str:
        # поле можно не передавать, но null затирать имя не должен
        if v is None:
            raise ValueError("name cannot be null")
        return v


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    phone: str | None = None
    city: str | None = None
    address: str | None = None
    referral_code: str
    referred_by: str | None = None
    bonus_balance: int
    first_order_completed: bool
    level: str | None = None

    saved_delivery_method: str | None = None
    saved_delivery_city: str | None = None
    saved_delivery_address: str | None = None
    saved_payment_method: str | None = None

    created_at: datetime


class ReferralOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    first_order_completed: bool
    created_at: datetime


class ReferralLinkOut(BaseModel):
    referral_code: str
    link: str
