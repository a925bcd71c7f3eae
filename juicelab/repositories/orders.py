from __future__ import annotations

from typing import Iterable

from sqlalchemy import select

from juicelab.models.order import Order
from juicelab.repositories.base import Repository


class OrderRepository(Repository):
    def get(self, order_id: str) -> Order | None:
        if not order_id:
            return None
        return self.db.get(Order, order_id)

    def add(self, order: Order) -> Order:
        self.db.add(order)
        self.db.flush()
        return order

    def list_all(self) -> list[Order]:
        return list(self.db.scalars(select(Order).order_by(Order.created_at.asc())).all())

    def list_by_status(self, status: str) -> list[Order]:
        return list(
            self.db.scalars(select(Order).where(Order.status == status).order_by(Order.created_at.asc())).all()
        )

    def list_for_user(self, user_id: str, statuses: Iterable[str] | None = None) -> list[Order]:
        q = select(Order).where(Order.user_id == user_id)
        if statuses is not None:
            q = q.where(Order.status.in_(list(statuses)))
        return list(self.db.scalars(q.order_by(Order.created_at.asc())).all())

