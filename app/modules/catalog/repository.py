# app/modules/catalog/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError

from app.shared.database.models import Category, Product

class CatalogRepository:
    """
    Single-row access to categories and products
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== CATEGORIES ====================

    def get_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.id).all()

    def get_category_by_id(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def create_category(self, name: str, description: Optional[str]) -> Category:
        try:
            category = Category(name=name, description=description)
            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
            return category
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def update_category(self, category: Category, name: str, description: Optional[str]) -> Category:
        try:
            category.name = name
            category.description = description
            self.db.commit()
            self.db.refresh(category)
            return category
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def delete_category(self, category: Category):
        try:
            self.db.delete(category)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def count_products_in_category(self, category_id: int) -> int:
        return self.db.query(Product).filter(Product.category_id == category_id).count()

    # ==================== PRODUCTS ====================

    def get_products(self) -> List[Product]:
        return self.db.query(Product).options(
            joinedload(Product.category)
        ).order_by(Product.id).all()

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).options(
            joinedload(Product.category)
        ).filter(Product.id == product_id).first()

    def create_product(
        self,
        name: str,
        price: int,
        stock: int,
        category_id: Optional[int]
    ) -> Product:
        try:
            product = Product(
                name=name,
                price=price,
                stock=stock,
                category_id=category_id
            )
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
            return product
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def update_product(
        self,
        product: Product,
        name: str,
        price: int,
        stock: int,
        category_id: Optional[int]
    ) -> Product:
        try:
            product.name = name
            product.price = price
            product.stock = stock
            product.category_id = category_id
            self.db.commit()
            self.db.refresh(product)
            return product
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def delete_product(self, product: Product):
        try:
            self.db.delete(product)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
