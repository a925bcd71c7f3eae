from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from juicelab.core.database import Base


class UserAchievement(Base):
    __tablename__ = "user_achievements"
    # Не больше одной записи на достижение у пользователя
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_id", name="uq_user_achievements_user_achievement"),
    )

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    achievement_id = Column(String(32), nullable=False)

    unlocked_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="achievements")
