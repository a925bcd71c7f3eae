from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from juicelab.core.database import Base


def _new_user_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("bonus_balance >= 0", name="ck_users_bonus_balance_non_negative"),
        CheckConstraint("referred_by IS NULL OR referred_by <> id", name="ck_users_no_self_referral"),
    )

    id = Column(String(32), primary_key=True, default=_new_user_id)

    # Всегда в нижнем регистре
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(120), nullable=False, default="")

    phone = Column(String(32), nullable=True)
    city = Column(String(120), nullable=True)
    address = Column(String(255), nullable=True)

    referral_code = Column(String(16), unique=True, index=True, nullable=False)
    # id пригласившего
    referred_by = Column(String(32), ForeignKey("users.id"), nullable=True, index=True)

    bonus_balance = Column(Integer, default=0, nullable=False)

    first_order_completed = Column(Boolean, default=False, nullable=False)

    # Кэш уровня (silver/gold/platinum), пересчитывается при каждом чтении
    level = Column(String(16), nullable=True)

    # Сохранённые данные для автозаполнения checkout
    saved_delivery_method = Column(String(16), nullable=True)  # courier | post | pickup
    saved_delivery_city = Column(String(120), nullable=True)
    saved_delivery_address = Column(String(255), nullable=True)
    saved_payment_method = Column(String(16), nullable=True)  # card | cash

    password_salt = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=True)

    achievements_checked_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    bonus_operations = relationship("BonusOperation", back_populates="user")
    orders = relationship("Order", back_populates="user")
    achievements = relationship("UserAchievement", back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, balance={self.bonus_balance})>"
