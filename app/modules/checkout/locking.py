# app/modules/checkout/locking.py
import logging
import math
import threading
from typing import Dict, Hashable, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from app.core.exceptions import LockTimeoutError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE raised when lock_timeout expires
LOCK_NOT_AVAILABLE = "55P03"

def is_lock_timeout(error: Exception) -> bool:
    """True when a database error reports a lock wait that ran out"""
    if not isinstance(error, DBAPIError):
        return False
    return getattr(error.orig, "pgcode", None) == LOCK_NOT_AVAILABLE

class ProductLockRegistry:
    """
    Process-wide map from (database, product id) to a mutex.

    Used for backends without row locks (SQLite). Locks are created lazily
    and kept for the life of the process.
    """

    def __init__(self):
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def get_lock(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def clear(self):
        with self._guard:
            self._locks.clear()

product_locks = ProductLockRegistry()

class ProductLocks:
    """
    Exclusive product locks held by one checkout unit of work.

    On databases with row locks the lock is the SELECT ... FOR UPDATE issued
    by the repository, and the database releases it on commit or rollback.
    Otherwise a mutex from the registry is taken here and must be released
    with release_all() once the unit of work has finished.
    """

    def __init__(
        self,
        db: Session,
        timeout: Optional[float] = None,
        registry: ProductLockRegistry = product_locks
    ):
        bind = db.get_bind()
        self.db = db
        self.dialect = bind.dialect.name
        self.row_locks = self.dialect != "sqlite"
        self.timeout = timeout
        self._registry = registry
        self._scope = str(bind.url)
        self._held: Dict[int, threading.Lock] = {}
        self._order: List[int] = []

    def prepare(self):
        """Apply the lock wait bound to the current database transaction"""
        if self.timeout is None or not self.row_locks:
            return
        if self.dialect == "postgresql":
            self.db.execute(text(f"SET LOCAL lock_timeout = {self.timeout_ms}"))
        else:
            logger.debug(f"Lock timeout not supported on {self.dialect}; waiting without bound")

    @property
    def timeout_ms(self) -> Optional[int]:
        """Wait bound in whole milliseconds; never 0, which PostgreSQL reads as no bound"""
        if self.timeout is None:
            return None
        return max(1, math.ceil(self.timeout * 1000))

    def acquire(self, product_id: int):
        if self.row_locks or product_id in self._held:
            return

        lock = self._registry.get_lock((self._scope, product_id))
        timeout = self.timeout if self.timeout is not None else -1
        if not lock.acquire(timeout=timeout):
            raise LockTimeoutError(product_id, self.timeout)

        self._held[product_id] = lock
        self._order.append(product_id)

    def release_all(self):
        while self._order:
            product_id = self._order.pop()
            self._held.pop(product_id).release()

    @property
    def held(self) -> List[int]:
        return list(self._order)
