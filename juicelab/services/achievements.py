"""
Achievements: fixed rule table, per-user unlock records.

check_and_unlock_achievements() recomputes UserStats from completed/delivered
orders and referral counts and unlocks every rule the user now satisfies.
Unlock is idempotent: an already unlocked achievement is never re-added.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from juicelab.core.achievement_rules import ACHIEVEMENTS, Achievement
from juicelab.core.loyalty_rules import QUALIFYING_ORDER_STATUSES
from juicelab.models.user_achievement import UserAchievement
from juicelab.repositories import AchievementRepository, OrderRepository, UserRepository, unit_of_work

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserStats:
    first_order_completed: bool = False
    referrals_count: int = 0
    total_spent: int = 0
    orders_count: int = 0
    max_single_order_amount: int = 0
    total_bonuses_used: int = 0


@dataclass(frozen=True)
class AchievementProgress:
    current: int
    target: int
    percentage: int


def get_user_achievements(db: Session, user_id: str) -> list[UserAchievement]:
    return AchievementRepository(db).list_for_user(user_id)


def has_achievement(db: Session, user_id: str, achievement_id: str) -> bool:
    return AchievementRepository(db).has(user_id, achievement_id)


def unlock_achievement(db: Session, user_id: str, achievement_id: str) -> bool:
    """False, если уже разблокировано (или такого достижения нет)."""
    if achievement_id not in ACHIEVEMENTS:
        return False
    repo = AchievementRepository(db)
    if repo.has(user_id, achievement_id):
        return False
    with unit_of_work(db):
        repo.add(user_id, achievement_id)
    logger.info(f"Achievement unlocked: user={user_id} achievement={achievement_id}")
    return True


def get_user_stats(db: Session, user_id: str) -> UserStats:
    user = UserRepository(db).get(user_id)
    if not user:
        return UserStats()

    orders = OrderRepository(db).list_for_user(user_id, QUALIFYING_ORDER_STATUSES)
    totals = [int(o.total or 0) for o in orders]

    return UserStats(
        first_order_completed=bool(user.first_order_completed),
        referrals_count=UserRepository(db).count_referrals(user_id),
        total_spent=sum(totals),
        orders_count=len(orders),
        max_single_order_amount=max(totals) if totals else 0,
        total_bonuses_used=sum(int(o.bonus_used or 0) for o in orders),
    )


def _current_value(achievement: Achievement, stats: UserStats) -> int:
    kind = achievement.condition_type
    if kind == "first_order":
        return 1 if stats.first_order_completed else 0
    if kind == "referrals_count":
        return stats.referrals_count
    if kind == "total_spent":
        return stats.total_spent
    if kind == "orders_count":
        return stats.orders_count
    if kind == "single_order_amount":
        return stats.max_single_order_amount
    if kind == "bonuses_used":
        return stats.total_bonuses_used
    return 0


def _is_satisfied(achievement: Achievement, stats: UserStats) -> bool:
    if achievement.condition_type == "first_order":
        return stats.first_order_completed
    return _current_value(achievement, stats) >= achievement.condition_value


def check_and_unlock_achievements(db: Session, user_id: str) -> list[str]:
    """Возвращает id достижений, разблокированных этим вызовом."""
    users = UserRepository(db)
    user = users.get(user_id)
    if not user:
        return []

    repo = AchievementRepository(db)
    stats = get_user_stats(db, user_id)
    already = {a.achievement_id for a in repo.list_for_user(user_id)}

    unlocked: list[str] = []
    now = datetime.utcnow()
    with unit_of_work(db):
        for achievement in ACHIEVEMENTS.values():
            if achievement.id in already:
                continue
            if _is_satisfied(achievement, stats):
                repo.add(user_id, achievement.id, unlocked_at=now)
                unlocked.append(achievement.id)
        users.update_fields(user_id, {"achievements_checked_at": now})

    if unlocked:
        logger.info(f"Achievements unlocked for {user_id}: {', '.join(unlocked)}")
    return unlocked


def get_achievement_progress(db: Session, user_id: str, achievement_id: str) -> AchievementProgress:
    achievement = ACHIEVEMENTS.get(achievement_id)
    if not achievement:
        return AchievementProgress(current=0, target=0, percentage=0)

    stats = get_user_stats(db, user_id)
    current = _current_value(achievement, stats)
    target = achievement.condition_value
    percentage = min(100, math.floor(current / target * 100 + 0.5))
    return AchievementProgress(current=current, target=target, percentage=percentage)
