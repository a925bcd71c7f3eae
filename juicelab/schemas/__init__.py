from juicelab.schemas.user import UserRegister, UserLogin, UserUpdate, UserOut, ReferralOut, ReferralLinkOut
from juicelab.schemas.bonus import BonusOperationOut, BonusAdjustIn, BonusBalanceOut, BonusQuoteIn, BonusQuoteOut
from juicelab.schemas.order import OrderCreate, OrderStatusUpdate, OrderOut
from juicelab.schemas.loyalty import (
    UserLevelOut,
    AchievementOut,
    UserAchievementOut,
    AchievementCheckOut,
    AchievementProgressOut,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserOut",
    "ReferralOut",
    "ReferralLinkOut",
    "BonusOperationOut",
    "BonusAdjustIn",
    "BonusBalanceOut",
    "BonusQuoteIn",
    "BonusQuoteOut",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderOut",
    "UserLevelOut",
    "AchievementOut",
    "UserAchievementOut",
    "AchievementCheckOut",
    "AchievementProgressOut",
]
