from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from juicelab.core.database import Base


def new_order_id() -> str:
    return uuid.uuid4().hex


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=new_order_id)

    # None = гостевой заказ (без аккаунта)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=True, index=True)

    customer_name = Column(String(120), nullable=False, default="")
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(32), nullable=True)

    # Сумма заказа до списания бонусов (грн, целое)
    total = Column(Integer, nullable=False, default=0)
    bonus_used = Column(Integer, nullable=False, default=0)

    # new / processing / completed / delivered / cancelled / returned
    status = Column(String(16), nullable=False, default="new", index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="orders")
    status_history = relationship(
        "OrderStatusChange",
        back_populates="order",
        order_by="OrderStatusChange.id",
        cascade="all, delete-orphan",
    )


class OrderStatusChange(Base):
    __tablename__ = "order_status_history"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(32), ForeignKey("orders.id"), nullable=False, index=True)

    status = Column(String(16), nullable=False)
    note = Column(String(255), nullable=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)

    order = relationship("Order", back_populates="status_history")
