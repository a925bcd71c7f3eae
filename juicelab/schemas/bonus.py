from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class BonusOperationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    amount: int
    type: Literal["credit", "debit"]
    reason: str
    date: datetime


class BonusAdjustIn(BaseModel):
    """Ручное начисление / списание админом."""
    model_config = ConfigDict(extra="forbid")

    amount: int = Field(..., gt=0)
    reason: str = Field(..., min_length=1, max_length=255)


class BonusBalanceOut(BaseModel):
    user_id: str
    bonus_balance: int


class BonusQuoteIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    order_total: int = Field(..., gt=0)
    bonus_amount: int = Field(default=0, ge=0)


class BonusQuoteOut(BaseModel):
    max_bonus_payment: int
    bonus_used: int
    final_total: int
    remaining_bonus: int
