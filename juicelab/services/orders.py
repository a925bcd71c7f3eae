from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from juicelab.core.errors import InsufficientBonus, UserNotFound, ValidationFailed
from juicelab.core.loyalty_rules import QUALIFYING_ORDER_STATUSES
from juicelab.models.order import Order, OrderStatusChange, new_order_id
from juicelab.repositories import OrderRepository, UserRepository, unit_of_work
from juicelab.services.achievements import check_and_unlock_achievements
from juicelab.services.bonus import process_order_with_bonus
from juicelab.services.referral import mark_first_order_completed

logger = logging.getLogger(__name__)

ORDER_STATUSES = ("new", "processing", "completed", "delivered", "cancelled", "returned")


def _check_status(status: str) -> str:
    status = (status or "").strip().lower()
    if status not in ORDER_STATUSES:
        raise ValidationFailed(f"Unknown order status: {status}")
    return status


def _on_qualifying(db: Session, order: Order) -> None:
    # Первый засчитанный заказ -> бонус пригласившему (один раз), затем достижения
    if not order.user_id:
        return
    mark_first_order_completed(db, order.user_id)
    check_and_unlock_achievements(db, order.user_id)


def add_order(
    db: Session,
    total: int,
    user_id: str | None = None,
    customer_name: str = "",
    customer_email: str | None = None,
    customer_phone: str | None = None,
    bonus_to_use: int = 0,
    status: str = "new",
) -> Order:
    """
    Оформление заказа. Бонусы списываются до оплаты (не больше 10% суммы
    и не больше баланса).
    """
    total = int(total)
    if total <= 0:
        raise ValidationFailed("total must be > 0")
    status = _check_status(status)
    bonus_to_use = int(bonus_to_use or 0)

    orders = OrderRepository(db)
    if user_id and not UserRepository(db).get(user_id):
        raise UserNotFound(user_id)
    if bonus_to_use and not user_id:
        raise ValidationFailed("bonus payment requires a registered user")

    order_id = new_order_id()
    bonus_used = 0
    if bonus_to_use > 0:
        result = process_order_with_bonus(db, user_id, order_id, total, bonus_to_use)
        if not result.success:
            balance = UserRepository(db).get(user_id).bonus_balance
            raise InsufficientBonus(user_id, bonus_to_use, balance)
        bonus_used = result.bonus_used

    now = datetime.utcnow()
    order = Order(
        id=order_id,
        user_id=user_id,
        customer_name=customer_name or "",
        customer_email=customer_email,
        customer_phone=customer_phone,
        total=total,
        bonus_used=bonus_used,
        status=status,
        created_at=now,
        updated_at=now,
    )
    order.status_history.append(OrderStatusChange(status=status, date=now))
    with unit_of_work(db):
        orders.add(order)

    logger.info(f"Order {order.id} created: user={user_id} total={total} bonus_used={order.bonus_used}")

    if status in QUALIFYING_ORDER_STATUSES:
        _on_qualifying(db, order)
    return order


def get_all_orders(db: Session) -> list[Order]:
    return OrderRepository(db).list_all()


def get_order_by_id(db: Session, order_id: str) -> Order | None:
    return OrderRepository(db).get(order_id)


def get_orders_by_status(db: Session, status: str) -> list[Order]:
    return OrderRepository(db).list_by_status(_check_status(status))


def get_user_orders(db: Session, user_id: str) -> list[Order]:
    return OrderRepository(db).list_for_user(user_id)


def update_order_status(db: Session, order_id: str, status: str, note: str | None = None) -> Order | None:
    status = _check_status(status)
    order = OrderRepository(db).get(order_id)
    if not order:
        return None

    previous = order.status
    now = datetime.utcnow()
    with unit_of_work(db):
        order.status = status
        order.updated_at = now
        order.status_history.append(OrderStatusChange(status=status, note=note, date=now))

    logger.info(f"Order {order_id} status: {previous} -> {status}")

    if status in QUALIFYING_ORDER_STATUSES and previous not in QUALIFYING_ORDER_STATUSES:
        _on_qualifying(db, order)
    return order
