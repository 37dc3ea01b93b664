"""Order repositories package."""

from modules.orders.repositories.interfaces import IOrderRepository
from modules.orders.repositories.sql_repository import OrderSqlRepository

__all__ = ["IOrderRepository", "OrderSqlRepository"]
