from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from juicelab.core.database import get_db
from juicelab.core.errors import InsufficientBonus, UserNotFound, ValidationFailed
from juicelab.core.role_guards import require_admin
from juicelab.schemas.order import OrderCreate, OrderOut, OrderStatusUpdate
from juicelab.services import orders as orders_service

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)) -> OrderOut:
    try:
        order = orders_service.add_order(
            db,
            total=payload.total,
            user_id=payload.user_id,
            customer_name=payload.customer_name,
            customer_email=payload.customer_email,
            customer_phone=payload.customer_phone,
            bonus_to_use=payload.bonus_to_use,
        )
    except UserNotFound:
        raise HTTPException(status_code=404, detail="User not found")
    except InsufficientBonus:
        raise HTTPException(status_code=400, detail="Недостаточно бонусов")
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=str(e))
    return OrderOut.model_validate(order)


@router.get("/", response_model=List[OrderOut], dependencies=[Depends(require_admin)])
def list_orders(
    status: Optional[str] = Query(default=None),
    user_id: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
) -> List[OrderOut]:
    try:
        if user_id:
            rows = orders_service.get_user_orders(db, user_id)
            if status:
                rows = [o for o in rows if o.status == status]
        elif status:
            rows = orders_service.get_orders_by_status(db, status)
        else:
            rows = orders_service.get_all_orders(db)
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [OrderOut.model_validate(o) for o in rows]


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, db: Session = Depends(get_db)) -> OrderOut:
    order = orders_service.get_order_by_id(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderOut.model_validate(order)


@router.post("/{order_id}/status", response_model=OrderOut, dependencies=[Depends(require_admin)])
def update_status(order_id: str, payload: OrderStatusUpdate, db: Session = Depends(get_db)) -> OrderOut:
    order = orders_service.update_order_status(db, order_id, payload.status, note=payload.note)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderOut.model_validate(order)
