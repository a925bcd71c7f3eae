from __future__ import annotations

from sqlalchemy import func, select, update

from juicelab.models.user import User
from juicelab.repositories.base import Repository


class UserRepository(Repository):
    """Keyed access to the users table. Never commits: the caller owns the transaction."""

    def get(self, user_id: str) -> User | None:
        if not user_id:
            return None
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        email = (email or "").strip().lower()
        if not email:
            return None
        return self.db.scalar(select(User).where(func.lower(User.email) == email))

    def get_by_referral_code(self, code: str) -> User | None:
        code = (code or "").strip().upper()
        if not code:
            return None
        return self.db.scalar(select(User).where(User.referral_code == code))

    def referral_code_exists(self, code: str) -> bool:
        return self.get_by_referral_code(code) is not None

    def list_all(self) -> list[User]:
        return list(self.db.scalars(select(User).order_by(User.created_at.asc())).all())

    def list_referrals(self, user_id: str) -> list[User]:
        return list(
            self.db.scalars(
                select(User).where(User.referred_by == user_id).order_by(User.created_at.asc())
            ).all()
        )

    def count_referrals(self, user_id: str) -> int:
        n = self.db.scalar(select(func.count()).select_from(User).where(User.referred_by == user_id))
        return int(n or 0)

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def update_fields(self, user_id: str, fields: dict) -> bool:
        user = self.get(user_id)
        if user is None:
            return False
        for k, v in fields.items():
            setattr(user, k, v)
        self.db.flush()
        return True

    # --- Атомарные изменения баланса (условный UPDATE вместо read-modify-write) ---

    def credit_balance(self, user_id: str, amount: int) -> bool:
        return self._execute(
            update(User)
            .where(User.id == user_id)
            .values(bonus_balance=User.bonus_balance + int(amount))
        )

    def debit_balance(self, user_id: str, amount: int) -> bool:
        # Проверка баланса и списание одним запросом: два параллельных
        # списания не могут оба пройти проверку по устаревшему балансу
        return self._execute(
            update(User)
            .where(User.id == user_id, User.bonus_balance >= int(amount))
            .values(bonus_balance=User.bonus_balance - int(amount))
        )

    def set_first_order_completed(self, user_id: str) -> bool:
        return self._execute(
            update(User)
            .where(User.id == user_id, User.first_order_completed.is_(False))
            .values(first_order_completed=True)
        )

    def _execute(self, stmt) -> bool:
        self.db.flush()
        res = self.db.execute(stmt.execution_options(synchronize_session=False))
        # объекты в сессии могли устареть после UPDATE в обход ORM
        self.db.expire_all()
        return res.rowcount == 1
