from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from juicelab.core.database import Base


class BonusOperation(Base):
    """
    Журнал операций с бонусами (только добавление, без изменений):
    - credit: начисление (реферальные бонусы, ручное начисление админом)
    - debit:  списание (оплата заказа, ручное списание админом)
    Сумма credit минус сумма debit по пользователю равна User.bonus_balance.
    """
    __tablename__ = "bonus_operations"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_bonus_operations_amount_positive"),
        CheckConstraint("type IN ('credit', 'debit')", name="ck_bonus_operations_type"),
    )

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    amount = Column(Integer, nullable=False)
    type = Column(String(8), nullable=False)  # credit | debit
    reason = Column(String(255), nullable=False, default="")

    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="bonus_operations")
