from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional

# ==================== BASE CLASS FOR RESPONSES ====================

class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

# ==================== REQUEST SCHEMAS ====================

class CategoryRequest(BaseModel):
    name: str = Field(..., description="Category name")
    description: Optional[str] = Field(None, description="Free text; snapshotted into sales")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str):
        if not v or not v.strip():
            raise ValueError('Name is required')
        return v.strip()

class ProductRequest(BaseModel):
    name: str = Field(..., description="Product name")
    price: int = Field(0, ge=0, description="Unit price in the smallest currency unit")
    stock: int = Field(0, ge=0, description="Units on hand")
    category_id: Optional[int] = Field(None, description="Category; 0 or null for none")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str):
        if not v or not v.strip():
            raise ValueError('Name is required')
        return v.strip()

    @field_validator('category_id')
    @classmethod
    def normalize_category(cls, v: Optional[int]):
        if v is not None and v <= 0:
            return None
        return v

# ==================== RESPONSE SCHEMAS ====================

class CategoryResponse(CatalogBaseModel):
    id: int
    name: str
    description: Optional[str]

class ProductResponse(CatalogBaseModel):
    id: int
    name: str
    price: int
    stock: int
    category_id: Optional[int]
    category_name: Optional[str] = None
    category_description: Optional[str] = None
