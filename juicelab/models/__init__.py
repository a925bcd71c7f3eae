# juicelab/models/__init__.py
from juicelab.models.user import User
from juicelab.models.bonus_operation import BonusOperation
from juicelab.models.order import Order, OrderStatusChange
from juicelab.models.user_achievement import UserAchievement

__all__ = ["User", "BonusOperation", "Order", "OrderStatusChange", "UserAchievement"]
