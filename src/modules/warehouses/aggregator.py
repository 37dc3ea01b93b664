"""Recomputation of the denormalized warehouse totals.

``Warehouse.quantity`` is a cache of the stock ledger.  This module is the
only writer of that column: every code path that changes ledger rows, and
every read that reports warehouse totals, goes through
``WarehouseAggregator.recompute_active_warehouse_totals``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

import structlog

if TYPE_CHECKING:
    from modules.warehouses.repositories.interfaces import (
        IStockRepository,
        IWarehouseRepository,
    )

logger = structlog.get_logger(__name__)


class WarehouseAggregator:
    def __init__(
        self,
        warehouse_repository: IWarehouseRepository,
        stock_repository: IStockRepository,
    ) -> None:
        self._warehouse_repo = warehouse_repository
        self._stock_repo = stock_repository

    def recompute_active_warehouse_totals(self) -> Dict[int, int]:
        """Set each active warehouse's total to the sum of its ledger rows.

        Inactive warehouses keep whatever total they had.  Returns the
        new totals keyed by warehouse ID.
        """
        totals: Dict[int, int] = {}
        for warehouse_id in self._warehouse_repo.active_ids():
            total = self._stock_repo.sum_by_warehouse(warehouse_id)
            self._warehouse_repo.set_total(warehouse_id, total)
            totals[warehouse_id] = total
        logger.debug("warehouse.totals_recomputed", warehouses=len(totals))
        return totals
