from pydantic import BaseModel, Field, ConfigDict
from typing import List
from datetime import datetime

# ==================== BASE CLASS FOR RESPONSES ====================

class CheckoutBaseModel(BaseModel):
    """Base for response schemas read straight from ORM rows"""
    model_config = ConfigDict(from_attributes=True)

# ==================== REQUEST SCHEMAS ====================

class CheckoutItem(BaseModel):
    # Positivity is a checkout rule, enforced by the engine so a bad line
    # aborts the request as invalid_item rather than a schema error
    product_id: int = Field(..., description="Product to buy")
    quantity: int = Field(..., description="Units to buy")

class CheckoutRequest(BaseModel):
    items: List[CheckoutItem] = Field(default_factory=list, description="Purchase lines, in order")

# ==================== RESPONSE SCHEMAS ====================

class TransactionDetailResponse(CheckoutBaseModel):
    id: int
    transaction_id: int
    product_id: int
    product_name: str
    product_description: str
    unit_price: int
    quantity: int
    subtotal: int

class TransactionResponse(CheckoutBaseModel):
    id: int
    total_amount: int
    created_at: datetime
    details: List[TransactionDetailResponse]
