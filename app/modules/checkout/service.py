# app/modules/checkout/service.py
import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import settings
from app.core.exceptions import (
    CheckoutError, EmptyItemsError, InvalidItemError, ProductNotFoundError,
    InsufficientStockError, InfrastructureFault, LockTimeoutError
)
from app.shared.database.models import Transaction, TransactionDetail
from app.shared.database.types import utc_now
from .locking import ProductLocks, is_lock_timeout
from .repository import CheckoutRepository
from .schemas import CheckoutItem

logger = logging.getLogger(__name__)

class CheckoutService:
    """
    Checkout engine: turns purchase lines into a sale and decrements stock.

    The whole checkout is one unit of work on the session it was built with.
    Either every stock decrement, the transaction row and all detail rows
    are committed, or none of them are.
    """

    def __init__(
        self,
        db: Session,
        lock_timeout: Optional[float] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.db = db
        self.repository = CheckoutRepository(db)
        self.lock_timeout = (
            lock_timeout if lock_timeout is not None
            else settings.checkout_lock_timeout_seconds
        )
        self.clock = clock

    def checkout(self, items: Sequence[CheckoutItem]) -> Transaction:
        """
        Process items in request order and persist the resulting transaction.

        Raises a CheckoutError subclass for rule violations and
        InfrastructureFault for storage failures; in both cases the session
        has been rolled back and every product lock released.
        """
        if not items:
            raise EmptyItemsError()

        locks = ProductLocks(self.db, timeout=self.lock_timeout)
        locking_product_id = None

        try:
            locks.prepare()

            details: List[TransactionDetail] = []
            total_amount = 0

            for index, item in enumerate(items):
                if item.product_id <= 0 or item.quantity <= 0:
                    raise InvalidItemError(index, item.product_id, item.quantity)

                locking_product_id = item.product_id
                locks.acquire(item.product_id)

                row = self.repository.get_product_for_update(
                    item.product_id, row_lock=locks.row_locks
                )
                if row is None:
                    raise ProductNotFoundError(item.product_id)

                product, category_description = row

                if product.stock < item.quantity:
                    raise InsufficientStockError(product.id, item.quantity, product.stock)

                self.repository.decrease_stock(product, item.quantity)

                subtotal = product.price * item.quantity
                total_amount += subtotal

                details.append(TransactionDetail(
                    product_id=product.id,
                    product_name=product.name,
                    product_description=category_description,
                    unit_price=product.price,
                    quantity=item.quantity,
                    subtotal=subtotal
                ))

            transaction = self.repository.create_transaction(total_amount, self.clock())
            self.repository.add_transaction_details(transaction, details)
            transaction_id = transaction.id

            self.db.commit()

        except CheckoutError as e:
            self.db.rollback()
            logger.warning(f"Checkout rejected ({e.code}): {e.message}")
            raise
        except InfrastructureFault as e:
            self.db.rollback()
            logger.error(f"❌ Checkout aborted: {e}")
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            if is_lock_timeout(e):
                logger.error(f"❌ Checkout aborted: lock wait on product {locking_product_id} timed out")
                raise LockTimeoutError(locking_product_id, self.lock_timeout) from e
            logger.exception("❌ Checkout failed on storage")
            raise InfrastructureFault(
                f"Checkout failed: {e}",
                public_message="Failed to checkout"
            ) from e
        except BaseException:
            self.db.rollback()
            raise
        finally:
            locks.release_all()

        logger.info(
            f"✅ Transaction {transaction_id} created - "
            f"{len(details)} items, total {total_amount}"
        )
        return transaction
