"""
Error taxonomy for checkout and reporting.

Business errors (CheckoutError subclasses) are deterministic and reported to
the client with a usable message. InfrastructureFault wraps storage failures
and is reported generically so storage internals never leak.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# ==================== BUSINESS ERRORS ====================

class CheckoutError(Exception):
    """Base class for caller-facing checkout rule violations"""
    code = "checkout_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class EmptyItemsError(CheckoutError):
    code = "empty_items"

    def __init__(self):
        super().__init__("Checkout items required")

class InvalidItemError(CheckoutError):
    code = "invalid_item"

    def __init__(self, index: int, product_id: int, quantity: int):
        super().__init__(
            f"Invalid checkout item at position {index}: "
            f"product_id and quantity must be positive (got product_id={product_id}, quantity={quantity})"
        )
        self.index = index
        self.product_id = product_id
        self.quantity = quantity

class ProductNotFoundError(CheckoutError):
    code = "product_not_found"
    status_code = 404

    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id

class InsufficientStockError(CheckoutError):
    code = "insufficient_stock"

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product {product_id}: requested {requested}, available {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available

# ==================== INFRASTRUCTURE ====================

class InfrastructureFault(Exception):
    """Storage failure; the unit of work has already been rolled back"""
    code = "internal_error"

    def __init__(self, message: str, public_message: Optional[str] = None):
        super().__init__(message)
        self.public_message = public_message or "Internal server error"

class LockTimeoutError(InfrastructureFault):
    """A product lock was not granted within the configured wait"""

    def __init__(self, product_id: int, timeout: float):
        super().__init__(
            f"Timed out after {timeout}s waiting for lock on product {product_id}",
            public_message="Failed to checkout"
        )
        self.product_id = product_id
        self.timeout = timeout

# ==================== HANDLERS ====================

async def checkout_error_handler(request: Request, exc: CheckoutError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code}
    )

async def infrastructure_fault_handler(request: Request, exc: InfrastructureFault):
    logger.error(f"❌ {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": exc.public_message, "code": exc.code}
    )

def register_exception_handlers(app: FastAPI):
    """Map the error taxonomy onto HTTP responses"""
    app.add_exception_handler(CheckoutError, checkout_error_handler)
    app.add_exception_handler(InfrastructureFault, infrastructure_fault_handler)
