"""Small helpers shared by the SQL repositories.

Repositories never hold a connection of their own: they receive a database
alias and borrow Django's per-thread connection for that alias, which Django
closes at the end of every request (success or error).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from django.db import connections
from django.db.backends.utils import CursorWrapper
from django.utils import timezone


def fetch_all(cursor: CursorWrapper) -> List[Dict[str, Any]]:
    """Return all rows from a cursor as dicts keyed by column name."""
    columns = [col[0] for col in cursor.description]
    return [dict(zip(columns, row)) for row in cursor.fetchall()]


def fetch_one(cursor: CursorWrapper) -> Optional[Dict[str, Any]]:
    """Return the next row as a dict, or ``None`` when exhausted."""
    row = cursor.fetchone()
    if row is None:
        return None
    columns = [col[0] for col in cursor.description]
    return dict(zip(columns, row))


def fetch_scalar(cursor: CursorWrapper, default: Any = None) -> Any:
    """Return the first column of the next row (``default`` when empty/NULL)."""
    row = cursor.fetchone()
    if row is None or row[0] is None:
        return default
    return row[0]


class SqlRepository:
    """Base class for repositories issuing hand-written parameterized SQL.

    ``using`` names the database alias (``DATABASES`` key) the repository
    talks to.  Services open their transactions on the same alias.
    """

    def __init__(self, using: str = "default") -> None:
        self.using = using

    @property
    def connection(self):
        return connections[self.using]

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and return the number of affected rows."""
        with self.connection.cursor() as cursor:
            cursor.execute(sql, params)
            return cursor.rowcount

    def raw(self, model, sql: str, params: Sequence[Any] = ()) -> List[Any]:
        """Map the rows of a SELECT onto model instances (``Model.objects.raw``)."""
        return list(model.objects.db_manager(self.using).raw(sql, params))

    def select_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with self.connection.cursor() as cursor:
            cursor.execute(sql, params)
            return fetch_all(cursor)

    def select_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        with self.connection.cursor() as cursor:
            cursor.execute(sql, params)
            return fetch_one(cursor)

    def select_scalar(self, sql: str, params: Sequence[Any] = (), default: Any = None) -> Any:
        with self.connection.cursor() as cursor:
            cursor.execute(sql, params)
            return fetch_scalar(cursor, default)

    # ------------------------------------------------------------------
    # Backend-specific fragments and parameter adaptation
    # ------------------------------------------------------------------

    def lock_clause(self) -> str:
        """``FOR UPDATE`` on backends with row locks, empty elsewhere."""
        if self.connection.features.has_select_for_update:
            return " FOR UPDATE"
        return ""

    def lock_row(self, table: str, id: Any) -> None:
        """Claim the write lock for a row that is about to be read for update.

        Backends with row locks take it in the ``FOR UPDATE`` read itself.
        SQLite only locks the whole database, and a transaction that reads
        before writing cannot wait for a concurrent writer: it fails with
        "database is locked" when it tries to write.  A no-op UPDATE makes
        the write lock the first thing the transaction asks for, so rivals
        queue on the busy timeout and read the row after our commit.
        """
        if self.connection.features.has_select_for_update:
            return
        self.execute(f"UPDATE {table} SET id = id WHERE id = %s", [id])

    def now(self) -> Any:
        return self.adapt_datetime(timezone.now())

    def adapt_datetime(self, value: datetime) -> Any:
        return self.connection.ops.adapt_datetimefield_value(value)

    def adapt_date(self, value: date) -> Any:
        return self.connection.ops.adapt_datefield_value(value)
