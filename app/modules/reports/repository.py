# app/modules/reports/repository.py
from datetime import datetime
from typing import Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import func, desc, asc

from app.shared.database.models import Transaction, TransactionDetail

class ReportRepository:
    """
    Read-only aggregate queries over the transaction log.
    Every window is half-open: start <= created_at < end.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_revenue_and_count(self, start: datetime, end: datetime) -> Tuple[int, int]:
        revenue, count = self.db.query(
            func.coalesce(func.sum(Transaction.total_amount), 0),
            func.count(Transaction.id)
        ).filter(
            Transaction.created_at >= start,
            Transaction.created_at < end
        ).one()

        return int(revenue), int(count)

    def get_top_product(self, start: datetime, end: datetime) -> Optional[Tuple[str, int]]:
        """
        Product name with the highest summed quantity in the window.
        Equal quantities resolve to the lexicographically smallest name.
        """
        quantity_sold = func.sum(TransactionDetail.quantity)

        row = self.db.query(
            TransactionDetail.product_name,
            quantity_sold
        ).join(
            Transaction, TransactionDetail.transaction_id == Transaction.id
        ).filter(
            Transaction.created_at >= start,
            Transaction.created_at < end
        ).group_by(
            TransactionDetail.product_name
        ).order_by(
            desc(quantity_sold),
            asc(TransactionDetail.product_name)
        ).first()

        if row is None:
            return None

        name, quantity = row
        return name, int(quantity)
