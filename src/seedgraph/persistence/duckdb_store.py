"""
DuckDB-backed unit of work.

Each record becomes one row in the table named after its kind: an ``id``
column plus one column per field. Rows are inserted in registration order
inside a single transaction, so parents land before the children that
reference them.
"""

import threading
from pathlib import Path
from typing import Any, Mapping, Optional

import duckdb

from ..errors import CommitError
from ..ids import IdGenerator
from ..record import Record, key_name, kind_name
from ..utils.logger import debug, error
from ..utils.settings import get_settings
from .unit_of_work import BaseUnitOfWork


def quote_identifier(name: str) -> str:
    """Quote a table or column name for DuckDB."""
    return '"' + name.replace('"', '""') + '"'


class SeedDatabase:
    """Owns one DuckDB connection, opened lazily."""

    def __init__(self, db_path: Optional[Path | str] = None):
        """Initialize the database wrapper.

        Args:
            db_path: Database file, or ":memory:". Defaults to settings.database_path.
        """
        self._db_path = str(db_path) if db_path is not None else get_settings().database_path
        self._conn: Optional[duckdb.DuckDBPyConnection] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return self._db_path

    def connect(self) -> duckdb.DuckDBPyConnection:
        """Get or create the database connection (thread-safe)."""
        with self._lock:
            if self._conn is None:
                self._conn = duckdb.connect(self._db_path)
                debug(f"Opened DuckDB database {self._db_path}")
            return self._conn

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn:
                self._conn.close()
                self._conn = None

    def ensure_table(self, table: str, columns: Mapping[str, str]) -> None:
        """Create ``table`` with an ``id`` primary key plus ``columns`` if missing.

        Args:
            table: Table name
            columns: Column name -> DuckDB type (e.g. {"name": "VARCHAR"})
        """
        column_sql = ",\n".join(
            f"    {quote_identifier(name)} {sql_type}" for name, sql_type in columns.items()
        )
        body = "    id VARCHAR PRIMARY KEY" + (",\n" + column_sql if column_sql else "")
        self.connect().execute(
            f"CREATE TABLE IF NOT EXISTS {quote_identifier(table)} (\n{body}\n)"
        )

    def fetch_rows(self, table: str, order_by: str = "id") -> list[dict[str, Any]]:
        """Read a whole table as dicts (mostly useful in tests)."""
        cursor = self.connect().execute(
            f"SELECT * FROM {quote_identifier(table)} ORDER BY {quote_identifier(order_by)}"
        )
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]


class DuckDBUnitOfWork(BaseUnitOfWork):
    """Unit of work that inserts records into DuckDB tables atomically."""

    def __init__(
        self,
        db: Optional[SeedDatabase] = None,
        id_generator: Optional[IdGenerator] = None,
        table_names: Optional[Mapping[Any, str]] = None,
    ):
        """Initialize the unit of work.

        Args:
            db: Target database. Defaults to a new SeedDatabase().
            id_generator: Source of identifiers for new rows
            table_names: Kind -> table name overrides. Unlisted kinds use kind_name(kind).
        """
        super().__init__(id_generator)
        self._db = db or SeedDatabase()
        self._table_names = dict(table_names or {})

    @property
    def db(self) -> SeedDatabase:
        return self._db

    def table_for(self, kind: Any) -> str:
        return self._table_names.get(kind, kind_name(kind))

    def _write(self, records: list[Record]) -> None:
        conn = self._db.connect()
        conn.execute("BEGIN TRANSACTION")
        try:
            for record in records:
                self._insert(conn, record)
            conn.execute("COMMIT")
        except duckdb.Error as exc:
            conn.execute("ROLLBACK")
            error(f"DuckDB commit of {len(records)} records failed: {exc}")
            raise CommitError(f"DuckDB rejected the batch: {exc}") from exc
        debug(f"Inserted {len(records)} rows into {self._db.path}")

    def _insert(self, conn: duckdb.DuckDBPyConnection, record: Record) -> None:
        columns = ["id"] + [key_name(key) for key in record.fields]
        values = [record.id] + list(record.fields.values())
        placeholders = ", ".join("?" for _ in columns)
        conn.execute(
            f"INSERT INTO {quote_identifier(self.table_for(record.kind))} "
            f"({', '.join(quote_identifier(c) for c in columns)}) "
            f"VALUES ({placeholders})",
            values,
        )
