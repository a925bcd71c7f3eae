from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from juicelab.core.errors import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Одна транзакция на операцию ledger'а.
    Либо коммитятся все записи (баланс + журнал + флаги), либо ни одной.
    Ошибка хранилища не превращается в пустой результат: откат и StoreError.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Ledger transaction rolled back: {e}")
        raise StoreError(str(e)) from e
    except Exception:
        db.rollback()
        raise


class Repository:
    def __init__(self, db: Session):
        self.db = db

