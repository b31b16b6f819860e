# app/modules/checkout/__init__.py
"""
Checkout module

Turns a list of purchase lines into a durable sale record while
decrementing inventory, as one atomic unit of work.

Layout:
- router.py: FastAPI endpoint
- service.py: checkout engine
- repository.py: data access (locked product reads, inserts)
- locking.py: per-product exclusive locks
- schemas.py: Pydantic request/response models
"""

from .router import router as checkout_router
from .service import CheckoutService
from .repository import CheckoutRepository

__all__ = [
    "checkout_router",
    "CheckoutService",
    "CheckoutRepository"
]
