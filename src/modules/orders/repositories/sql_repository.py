"""SQL implementation of the Order repository."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from modules.core.db import SqlRepository
from modules.core.models import new_id
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, Position
from modules.orders.repositories.interfaces import IOrderRepository

_ORDER_COLUMNS = "id, order_date, status, created_at, updated_at"
_POSITION_COLUMNS = "id, order_id, product_id, quantity, created_at, updated_at"


class OrderSqlRepository(SqlRepository, IOrderRepository):
    """Concrete Order repository backed by raw SQL.

    Missing rows come back as ``None``/``False``; the service decides
    which domain error that is.
    """

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        rows = self.raw(Order, f"SELECT {_ORDER_COLUMNS} FROM orders WHERE id = %s", [id])
        return rows[0] if rows else None

    def get_for_update(self, id: str) -> Optional[Order]:
        self.lock_row("orders", id)
        sql = f"SELECT {_ORDER_COLUMNS} FROM orders WHERE id = %s" + self.lock_clause()
        rows = self.raw(Order, sql, [id])
        return rows[0] if rows else None

    def list(self) -> List[Order]:
        return self.raw(Order, f"SELECT {_ORDER_COLUMNS} FROM orders ORDER BY id")

    def exists(self, id: str) -> bool:
        count = self.select_scalar("SELECT COUNT(*) FROM orders WHERE id = %s", [id], default=0)
        return count > 0

    def create(self, order_date: date) -> Order:
        order_id = new_id()
        now = self.now()
        self.execute(
            "INSERT INTO orders (id, order_date, status, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s)",
            [order_id, self.adapt_date(order_date), OrderStatus.OPEN.value, now, now],
        )
        return self.get_by_id(order_id)

    def delete(self, id: str) -> bool:
        return self.execute("DELETE FROM orders WHERE id = %s", [id]) > 0

    def mark_closed(self, id: str) -> bool:
        affected = self.execute(
            "UPDATE orders SET status = %s, updated_at = %s WHERE id = %s AND status = %s",
            [OrderStatus.CLOSED.value, self.now(), id, OrderStatus.OPEN.value],
        )
        return affected > 0

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def positions_for(self, order_id: str) -> List[Position]:
        return self.raw(
            Position,
            f"SELECT {_POSITION_COLUMNS} FROM order_positions WHERE order_id = %s ORDER BY id",
            [order_id],
        )

    def positions_by_order(self) -> Dict[str, List[Position]]:
        grouped: Dict[str, List[Position]] = {}
        positions = self.raw(
            Position,
            f"SELECT {_POSITION_COLUMNS} FROM order_positions ORDER BY order_id, id",
        )
        for position in positions:
            grouped.setdefault(position.order_id, []).append(position)
        return grouped

    def add_position(self, order_id: str, product_id: str, quantity: int) -> Position:
        position_id = new_id()
        now = self.now()
        self.execute(
            "INSERT INTO order_positions "
            "(id, order_id, product_id, quantity, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            [position_id, order_id, product_id, quantity, now, now],
        )
        return self.get_position(order_id, position_id)

    def get_position(self, order_id: str, position_id: str) -> Optional[Position]:
        rows = self.raw(
            Position,
            f"SELECT {_POSITION_COLUMNS} FROM order_positions WHERE id = %s AND order_id = %s",
            [position_id, order_id],
        )
        return rows[0] if rows else None

    def delete_position(self, position_id: str) -> bool:
        return self.execute("DELETE FROM order_positions WHERE id = %s", [position_id]) > 0

    def delete_positions_for_order(self, order_id: str) -> int:
        return self.execute("DELETE FROM order_positions WHERE order_id = %s", [order_id])

    def required_quantities(self, order_id: str) -> Dict[str, int]:
        rows = self.select_all(
            "SELECT product_id, SUM(quantity) AS required FROM order_positions "
            "WHERE order_id = %s GROUP BY product_id ORDER BY product_id",
            [order_id],
        )
        return {row["product_id"]: int(row["required"]) for row in rows}
