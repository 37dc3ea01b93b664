from modules.warehouses.repositories.interfaces import IStockRepository, IWarehouseRepository
from modules.warehouses.repositories.sql_repository import (
    StockSqlRepository,
    WarehouseSqlRepository,
)

__all__ = [
    "IStockRepository",
    "IWarehouseRepository",
    "StockSqlRepository",
    "WarehouseSqlRepository",
]
