"""Small helper layer over a DB-API 2.0 connection."""

from __future__ import annotations

from contextlib import closing
from typing import Any

from walletsys import log


class DatabaseError(Exception):
    """A statement was invalid or changed no rows."""


def _row_to_dict(description, row) -> dict[str, Any]:
    return {column[0]: value for column, value in zip(description, row)}


class Database:
    """Runs queries on a DB-API connection and returns rows as dicts."""

    def __init__(self, conn) -> None:
        self._conn = conn

    def begin(self):
        """Start a transaction; the returned cursor is passed to ``execute_tx``."""
        return self._conn.cursor()

    def commit(self, tx) -> None:
        try:
            self._conn.commit()
        finally:
            tx.close()

    def rollback(self, tx) -> None:
        try:
            self._conn.rollback()
        finally:
            tx.close()

    def prepare(self, query: str) -> str:
        """Check a query before use; an invalid one raises ``DatabaseError``."""
        if not isinstance(query, str) or not query.strip():
            log.errorln("invalid prepare query", query)
            raise DatabaseError(f"invalid prepare query {query!r}")
        return query

    def get(self, stmt: str, *args: Any) -> dict[str, Any] | None:
        """Return the first row, or ``None`` when there is none."""
        with closing(self._conn.cursor()) as cursor:
            cursor.execute(stmt, args)
            row = cursor.fetchone()
            if row is None:
                return None
            return _row_to_dict(cursor.description, row)

    def select(self, stmt: str, *args: Any) -> list[dict[str, Any]]:
        with closing(self._conn.cursor()) as cursor:
            cursor.execute(stmt, args)
            return [_row_to_dict(cursor.description, row) for row in cursor.fetchall()]

    def execute(self, stmt: str, *args: Any) -> None:
        """Run and commit a statement that must change at least one row."""
        with closing(self._conn.cursor()) as cursor:
            cursor.execute(stmt, args)
            affected = cursor.rowcount
        self._conn.commit()
        if affected <= 0:
            raise DatabaseError("failed ExecContextStmt")

    def execute_tx(self, tx, stmt: str, *args: Any) -> None:
        """Run a statement inside ``tx``; it must change at least one row."""
        tx.execute(stmt, args)
        if tx.rowcount <= 0:
            raise DatabaseError("failed ExecContextStmtTx")