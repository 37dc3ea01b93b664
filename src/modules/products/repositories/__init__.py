"""Product repositories package."""

from modules.products.repositories.interfaces import IProductRepository
from modules.products.repositories.sql_repository import ProductSqlRepository

__all__ = ["IProductRepository", "ProductSqlRepository"]
