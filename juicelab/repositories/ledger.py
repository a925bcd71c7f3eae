from __future__ import annotations

from datetime import datetime

from sqlalchemy import case, func, select

from juicelab.models.bonus_operation import BonusOperation
from juicelab.repositories.base import Repository


class LedgerRepository(Repository):
    """Append-only bonus operation log."""

    def append(
        self,
        user_id: str,
        amount: int,
        op_type: str,
        reason: str,
        date: datetime | None = None,
    ) -> BonusOperation:
        op = BonusOperation(
            user_id=user_id,
            amount=int(amount),
            type=op_type,
            reason=reason or "",
            date=date or datetime.utcnow(),
        )
        self.db.add(op)
        self.db.flush()
        return op

    def history(self, user_id: str) -> list[BonusOperation]:
        return list(
            self.db.scalars(
                select(BonusOperation)
                .where(BonusOperation.user_id == user_id)
                .order_by(BonusOperation.id.asc())
            ).all()
        )

    def net_total(self, user_id: str) -> int:
        """sum(credit) - sum(debit) по журналу."""
        signed = case((BonusOperation.type == "credit", BonusOperation.amount), else_=-BonusOperation.amount)
        total = self.db.scalar(
            select(func.coalesce(func.sum(signed), 0)).where(BonusOperation.user_id == user_id)
        )
        return int(total or 0)
