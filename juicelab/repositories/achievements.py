from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select

from juicelab.models.user_achievement import UserAchievement
from juicelab.repositories.base import Repository


class AchievementRepository(Repository):
    def list_for_user(self, user_id: str) -> list[UserAchievement]:
        return list(
            self.db.scalars(
                select(UserAchievement)
                .where(UserAchievement.user_id == user_id)
                .order_by(UserAchievement.id.asc())
            ).all()
        )

    def has(self, user_id: str, achievement_id: str) -> bool:
        n = self.db.scalar(
            select(func.count())
            .select_from(UserAchievement)
            .where(UserAchievement.user_id == user_id, UserAchievement.achievement_id == achievement_id)
        )
        return (n or 0) > 0

    def add(self, user_id: str, achievement_id: str, unlocked_at: datetime | None = None) -> UserAchievement:
        row = UserAchievement(
            user_id=user_id,
            achievement_id=achievement_id,
            unlocked_at=unlocked_at or datetime.utcnow(),
        )
        self.db.add(row)
        self.db.flush()
        return row
