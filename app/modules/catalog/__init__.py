# app/modules/catalog/__init__.py
"""
Catalog module

Category and product maintenance: list, read, create, update, delete.
Checkout reads and locks these rows; it never goes through this module.
"""

from .router import router as catalog_router
from .service import CatalogService
from .repository import CatalogRepository

__all__ = [
    "catalog_router",
    "CatalogService",
    "CatalogRepository"
]
