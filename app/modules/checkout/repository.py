# app/modules/checkout/repository.py
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy.orm import Query, Session
from sqlalchemy import func

from app.shared.database.models import Category, Product, Transaction, TransactionDetail

class CheckoutRepository:
    """
    Data access for checkout. Nothing here commits: the service owns the
    unit of work and decides between commit and rollback.
    """

    def __init__(self, db: Session):
        self.db = db

    def product_for_update_query(self, product_id: int, row_lock: bool = True) -> Query:
        """
        Product plus its category description ('' without category).
        With row_lock only the product row is locked (FOR UPDATE OF product),
        until the transaction ends.
        """
        query = self.db.query(
            Product,
            func.coalesce(Category.description, "")
        ).outerjoin(
            Category, Product.category_id == Category.id
        ).filter(
            Product.id == product_id
        ).populate_existing()

        if row_lock:
            query = query.with_for_update(of=Product)

        return query

    def get_product_for_update(
        self,
        product_id: int,
        row_lock: bool = True
    ) -> Optional[Tuple[Product, str]]:
        return self.product_for_update_query(product_id, row_lock).one_or_none()

    def decrease_stock(self, product: Product, quantity: int):
        product.stock -= quantity
        self.db.flush()

    def create_transaction(self, total_amount: int, created_at: datetime) -> Transaction:
        transaction = Transaction(
            total_amount=total_amount,
            created_at=created_at
        )

        self.db.add(transaction)
        self.db.flush()

        return transaction

    def add_transaction_details(
        self,
        transaction: Transaction,
        details: List[TransactionDetail]
    ) -> List[TransactionDetail]:
        """Insert detail rows in the given order, stamped with the transaction id"""
        for detail in details:
            detail.transaction_id = transaction.id
            transaction.details.append(detail)

        self.db.flush()
        return details
