# app/modules/checkout/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from .service import CheckoutService
from .schemas import CheckoutRequest, TransactionResponse

router = APIRouter(prefix="/checkout", tags=["Checkout"])

@router.post("", response_model=TransactionResponse, status_code=201)
def checkout(
    request: CheckoutRequest,
    db: Session = Depends(get_db)
):
    """
    Create a sale from purchase lines and decrement stock atomically

    - empty items / invalid line / insufficient stock: 400
    - unknown product: 404
    """
    service = CheckoutService(db)

    transaction = service.checkout(request.items)

    return TransactionResponse.model_validate(transaction)
