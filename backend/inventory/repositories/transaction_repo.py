from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from inventory.models.transaction import Transaction
from inventory.utils.pagination import paginate


def _day_start(d: date) -> datetime:
    return datetime.combine(d, time.min)


class TransactionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, transaction_id: int) -> Optional[Transaction]:
        return self.db.get(Transaction, transaction_id)

    def list(
        self,
        on_date: Optional[date] = None,
        kind: Optional[str] = None,
        product_id: Optional[int] = None,
        page: int = 1,
        size: int = 10,
    ) -> Tuple[List[Transaction], int]:
        query = self.db.query(Transaction)
        if on_date is not None:
            start = _day_start(on_date)
            query = query.filter(
                Transaction.date >= start, Transaction.date < start + timedelta(days=1)
            )
        if kind:
            query = query.filter(Transaction.kind == kind)
        if product_id is not None:
            query = query.filter(Transaction.product_id == product_id)
        return paginate(query, page, size, Transaction.date.desc(), Transaction.id.desc())

    def summary(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> List[dict]:
        """Count and total amount per kind; both bounds are inclusive calendar days."""
        query = self.db.query(
            Transaction.kind,
            func.count(Transaction.id),
            func.coalesce(func.sum(Transaction.total_price), 0),
        )
        if date_from is not None:
            query = query.filter(Transaction.date >= _day_start(date_from))
        if date_to is not None:
            query = query.filter(Transaction.date < _day_start(date_to) + timedelta(days=1))
        rows = query.group_by(Transaction.kind).order_by(Transaction.kind).all()
        return [
            {
                "kind": kind,
                "count": count,
                "total_amount": Decimal(str(amount)).quantize(Decimal("0.01")),
            }
            for kind, count, amount in rows
        ]

    def add(self, txn: Transaction) -> Transaction:
        self.db.add(txn)
        self.db.flush()
        return txn

    def delete(self, txn: Transaction):
        self.db.delete(txn)
        self.db.flush()
