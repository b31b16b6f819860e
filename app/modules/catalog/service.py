# app/modules/catalog/service.py
import logging
from typing import List, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.shared.database.models import Category, Product
from .repository import CatalogRepository
from .schemas import CategoryRequest, ProductRequest

logger = logging.getLogger(__name__)

class CatalogService:
    """
    Category and product maintenance. Thin pass-through over the repository:
    the only rule is that the row exists.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = CatalogRepository(db)

    # ==================== CATEGORIES ====================

    def list_categories(self) -> List[Category]:
        return self.repository.get_categories()

    def get_category(self, category_id: int) -> Category:
        category = self.repository.get_category_by_id(category_id)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    def create_category(self, data: CategoryRequest) -> Category:
        category = self.repository.create_category(data.name, data.description)
        logger.info(f"Category {category.id} created")
        return category

    def update_category(self, category_id: int, data: CategoryRequest) -> Category:
        category = self.get_category(category_id)
        return self.repository.update_category(category, data.name, data.description)

    def delete_category(self, category_id: int):
        category = self.get_category(category_id)

        in_use = self.repository.count_products_in_category(category_id)
        if in_use:
            raise HTTPException(
                status_code=409,
                detail=f"Category is used by {in_use} product(s)"
            )

        self.repository.delete_category(category)
        logger.info(f"Category {category_id} deleted")

    # ==================== PRODUCTS ====================

    def list_products(self) -> List[Product]:
        return self.repository.get_products()

    def get_product(self, product_id: int) -> Product:
        product = self.repository.get_product_by_id(product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def create_product(self, data: ProductRequest) -> Product:
        self._check_category(data.category_id)

        product = self.repository.create_product(
            name=data.name,
            price=data.price,
            stock=data.stock,
            category_id=data.category_id
        )
        logger.info(f"Product {product.id} created")
        return product

    def update_product(self, product_id: int, data: ProductRequest) -> Product:
        product = self.get_product(product_id)
        self._check_category(data.category_id)

        return self.repository.update_product(
            product,
            name=data.name,
            price=data.price,
            stock=data.stock,
            category_id=data.category_id
        )

    def delete_product(self, product_id: int):
        product = self.get_product(product_id)
        self.repository.delete_product(product)
        logger.info(f"Product {product_id} deleted")

    def _check_category(self, category_id: Optional[int]):
        if category_id is not None and not self.repository.get_category_by_id(category_id):
            raise HTTPException(status_code=400, detail=f"Category {category_id} does not exist")
