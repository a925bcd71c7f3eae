from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from juicelab.core.level_rules import (
    LevelInfo,
    LevelProgress,
    UserLevel,
    UserPoints,
    calculate_user_points,
    get_level_info,
    get_level_progress,
    get_user_level,
)
from juicelab.core.loyalty_rules import QUALIFYING_ORDER_STATUSES
from juicelab.repositories import OrderRepository, UserRepository, unit_of_work

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserLevelData:
    points: UserPoints
    level: UserLevel
    level_info: LevelInfo
    progress: LevelProgress


def _points_for(db: Session, user_id: str) -> UserPoints:
    orders = OrderRepository(db).list_for_user(user_id, QUALIFYING_ORDER_STATUSES)
    total_spent = sum(int(o.total or 0) for o in orders)
    referrals = UserRepository(db).count_referrals(user_id)
    return calculate_user_points(len(orders), total_spent, referrals)


def get_user_level_data(db: Session, user_id: str) -> UserLevelData:
    """
    Баллы, уровень и прогресс. Считается заново при каждом чтении;
    если уровень изменился, кэшируется в User.level.
    """
    users = UserRepository(db)
    user = users.get(user_id)
    if not user:
        return UserLevelData(
            points=UserPoints(0, 0, 0, 0),
            level="silver",
            level_info=get_level_info("silver"),
            progress=LevelProgress(current=0, next=0, percentage=0, next_level=None),
        )

    points = _points_for(db, user_id)
    level = get_user_level(points.total_points)

    if user.level != level:
        with unit_of_work(db):
            users.update_fields(user_id, {"level": level})
        logger.info(f"Level changed: user={user_id} {level}")

    return UserLevelData(
        points=points,
        level=level,
        level_info=get_level_info(level),
        progress=get_level_progress(points.total_points, level),
    )


def get_user_level_only(db: Session, user_id: str) -> UserLevel:
    if not UserRepository(db).get(user_id):
        return "silver"
    return get_user_level(_points_for(db, user_id).total_points)
