# app/modules/catalog/router.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from .service import CatalogService
from .schemas import (
    CategoryRequest, CategoryResponse,
    ProductRequest, ProductResponse
)

router = APIRouter(tags=["Catalog"])

# ==================== CATEGORIES ====================

@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    service = CatalogService(db)
    return [CategoryResponse.model_validate(c) for c in service.list_categories()]

@router.get("/categories/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db)):
    service = CatalogService(db)
    return CategoryResponse.model_validate(service.get_category(category_id))

@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(data: CategoryRequest, db: Session = Depends(get_db)):
    service = CatalogService(db)
    return CategoryResponse.model_validate(service.create_category(data))

@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(category_id: int, data: CategoryRequest, db: Session = Depends(get_db)):
    service = CatalogService(db)
    return CategoryResponse.model_validate(service.update_category(category_id, data))

@router.delete("/categories/{category_id}", status_code=204)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    service = CatalogService(db)
    service.delete_category(category_id)
    return Response(status_code=204)

# ==================== PRODUCTS ====================

@router.get("/products", response_model=List[ProductResponse])
def list_products(db: Session = Depends(get_db)):
    service = CatalogService(db)
    return [ProductResponse.model_validate(p) for p in service.list_products()]

@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    service = CatalogService(db)
    return ProductResponse.model_validate(service.get_product(product_id))

@router.post("/products", response_model=ProductResponse, status_code=201)
def create_product(data: ProductRequest, db: Session = Depends(get_db)):
    service = CatalogService(db)
    return ProductResponse.model_validate(service.create_product(data))

@router.put("/products/{product_id}", response_model=ProductResponse)
def update_product(product_id: int, data: ProductRequest, db: Session = Depends(get_db)):
    service = CatalogService(db)
    return ProductResponse.model_validate(service.update_product(product_id, data))

@router.delete("/products/{product_id}", status_code=204)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    service = CatalogService(db)
    service.delete_product(product_id)
    return Response(status_code=204)
