from juicelab.repositories.base import Repository, unit_of_work
from juicelab.repositories.users import UserRepository
from juicelab.repositories.ledger import LedgerRepository
from juicelab.repositories.orders import OrderRepository
from juicelab.repositories.achievements import AchievementRepository

__all__ = [
    "Repository",
    "unit_of_work",
    "UserRepository",
    "LedgerRepository",
    "OrderRepository",
    "AchievementRepository",
]
