from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from juicelab.core.database import get_db
from juicelab.core.role_guards import require_admin
from juicelab.schemas.bonus import (
    BonusAdjustIn,
    BonusBalanceOut,
    BonusOperationOut,
    BonusQuoteIn,
    BonusQuoteOut,
)
from juicelab.services import bonus as bonus_service
from juicelab.services import users as users_service

router = APIRouter(prefix="/bonuses", tags=["bonuses"])


def _must_user(db: Session, user_id: str):
    user = users_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}/history", response_model=list[BonusOperationOut])
def bonus_history(user_id: str, db: Session = Depends(get_db)) -> list[BonusOperationOut]:
    _must_user(db, user_id)
    ops = bonus_service.get_user_bonus_history(db, user_id)
    # Новые сверху
    ops = sorted(ops, key=lambda op: (op.date, op.id), reverse=True)
    return [BonusOperationOut.model_validate(op) for op in ops]


@router.post("/{user_id}/credit", response_model=BonusBalanceOut, dependencies=[Depends(require_admin)])
def credit(user_id: str, payload: BonusAdjustIn, db: Session = Depends(get_db)) -> BonusBalanceOut:
    if not bonus_service.add_bonus_to_user(db, user_id, payload.amount, payload.reason):
        raise HTTPException(status_code=404, detail="User not found")
    user = _must_user(db, user_id)
    return BonusBalanceOut(user_id=user.id, bonus_balance=user.bonus_balance)


@router.post("/{user_id}/debit", response_model=BonusBalanceOut, dependencies=[Depends(require_admin)])
def debit(user_id: str, payload: BonusAdjustIn, db: Session = Depends(get_db)) -> BonusBalanceOut:
    user = _must_user(db, user_id)
    if not bonus_service.deduct_bonus_from_user(db, user_id, payload.amount, payload.reason):
        raise HTTPException(status_code=400, detail="Недостаточно бонусов")
    db.refresh(user)
    return BonusBalanceOut(user_id=user.id, bonus_balance=user.bonus_balance)


@router.post("/quote", response_model=BonusQuoteOut)
def quote(payload: BonusQuoteIn) -> BonusQuoteOut:
    calc = bonus_service.calculate_order_total_with_bonus(payload.order_total, payload.bonus_amount)
    return BonusQuoteOut(
        max_bonus_payment=bonus_service.calculate_max_bonus_payment(payload.order_total),
        **asdict(calc),
    )
