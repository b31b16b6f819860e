from pydantic import BaseModel, Field
from typing import Optional

# ==================== RESPONSE SCHEMAS ====================

class TopProductResponse(BaseModel):
    name: str
    quantity_sold: int

class ReportSummary(BaseModel):
    total_revenue: int = Field(0, description="Sum of transaction totals in the window")
    total_transactions: int = Field(0, description="Number of transactions in the window")
    top_product: Optional[TopProductResponse] = Field(
        None,
        description="Best-selling product by quantity; null when nothing was sold"
    )
