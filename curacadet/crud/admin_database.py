# curacadet/crud/admin_database.py
"""Raw-SQL helpers behind the super-admin database browser.

Statements typed into the SQL console run as-is: the console is a privileged
tool and the only gate in front of it is the ``super_admin`` role check in
the router. Everything this module builds itself (cell edits, row deletes,
column changes) binds values as parameters and only interpolates identifiers
that exist in the introspected schema.
"""
import logging
from typing import Any, Mapping, NamedTuple, Optional

from sqlalchemy import inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session

from curacadet.core.config import settings
from curacadet.core.exceptions import (
    ExecutionError,
    NotFoundError,
    ValidationError,
    describe_engine_error,
)

logger = logging.getLogger(__name__)

# Physical per-row identifier, selected as text next to the table's own columns
ROW_ID_COLUMNS = {
    "postgresql": "ctid",
    "sqlite": "rowid",
}

ROW_ID_SELECTS = {
    "ctid": "ctid::text AS ctid",
    "rowid": "CAST(rowid AS TEXT) AS rowid",
}

ROW_ID_CONDITIONS = {
    "ctid": "ctid = CAST(:row_key AS tid)",
    "rowid": "rowid = CAST(:row_key AS INTEGER)",
}

COLUMN_TYPES = ("VARCHAR(255)", "TEXT", "INTEGER", "BOOLEAN", "TIMESTAMP", "DATE")


class RowKey(NamedTuple):
    """Column and value that target a single displayed row."""

    column: str
    value: str


def row_id_column(db: Session) -> Optional[str]:
    return ROW_ID_COLUMNS.get(db.get_bind().dialect.name)


def resolve_row_key(row: Mapping[str, Any], rowid_column: Optional[str]) -> RowKey:
    """Pick the key used to UPDATE or DELETE a row shown in the browser.

    A truthy ``id`` always wins. Otherwise the physical row identifier
    captured when the row was read is used. The value is kept as a string
    whatever the column type, and is bound as a parameter by the caller.
    """
    row_id = row.get("id")
    if row_id:
        return RowKey("id", str(row_id))

    physical_id = row.get(rowid_column) if rowid_column else None
    if physical_id:
        return RowKey(rowid_column, str(physical_id))

    raise ValidationError("no id or row identifier found")


def _plain(value):
    if isinstance(value, memoryview):
        value = value.tobytes()
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    return value


def execute_admin_query(db: Session, query) -> dict:
    """Run a free-form statement and return ``{rows, rowCount, fields}``.

    The text goes to the driver untouched (no bind-parameter parsing). For
    row-returning statements ``rowCount`` is the number of rows, otherwise
    the number of affected rows. Engine failures roll back and come back as
    ExecutionError with the engine's message.
    """
    if not query or not isinstance(query, str) or not query.strip():
        raise ValidationError("Query is required")

    try:
        result = db.connection().exec_driver_sql(
            query, execution_options={"no_parameters": True}
        )
        if result.returns_rows:
            names = list(result.keys())
            rows = [
                {name: _plain(value) for name, value in row._mapping.items()}
                for row in result
            ]
            row_count = len(rows)
        else:
            names, rows = [], []
            row_count = max(result.rowcount, 0)
        db.commit()
    except Exception as exc:
        db.rollback()
        message, detail = describe_engine_error(exc)
        logger.warning(f"⚠️ [SQL console] Statement failed: {message}")
        raise ExecutionError(message, detail)

    logger.info(f"🛠️ [SQL console] Statement ok, rowCount={row_count}")
    return {
        "rows": rows,
        "rowCount": row_count,
        "fields": [{"name": name} for name in names],
    }


def columns_of(result: Mapping[str, Any], exclude: Optional[str] = None) -> list:
    """Column names of a query result, from ``fields`` or else the first row."""
    names = [field["name"] for field in result.get("fields") or []]
    if not names and result.get("rows"):
        names = list(result["rows"][0].keys())
    return [name for name in names if name != exclude]


def database_host() -> str:
    url = make_url(settings.DATABASE_URL)
    return url.host or url.database or "Unknown Host"


def list_tables(db: Session) -> list:
    names = sorted(inspect(db.connection()).get_table_names())
    return [{"table_name": name} for name in names]


def _quote(db: Session, name: str) -> str:
    quoted = db.get_bind().dialect.identifier_preparer.quote_identifier(name)
    # text() would read ":word" inside an identifier as a bind parameter
    return quoted.replace(":", "\\:")


def _ensure_table(db: Session, table: str):
    if table not in inspect(db.connection()).get_table_names():
        raise NotFoundError(f"Table not found: {table}")


def _ensure_column(db: Session, table: str, column: str):
    columns = {col["name"] for col in inspect(db.connection()).get_columns(table)}
    if column not in columns:
        raise NotFoundError(f"Column not found: {column}")


def _key_condition(db: Session, key: RowKey) -> str:
    if key.column in ROW_ID_CONDITIONS:
        return ROW_ID_CONDITIONS[key.column]
    return f"{_quote(db, key.column)} = :row_key"


def _run(db: Session, statement: str, params: dict | None = None) -> int:
    try:
        result = db.execute(text(statement), params or {})
        db.commit()
    except Exception as exc:
        db.rollback()
        message, detail = describe_engine_error(exc)
        logger.warning(f"⚠️ [DB browser] {message}")
        raise ExecutionError(message, detail)
    return result.rowcount


def fetch_table_rows(db: Session, table: str, limit: int | None = None) -> dict:
    _ensure_table(db, table)
    limit = int(limit or settings.ADMIN_TABLE_ROW_LIMIT)

    rowid = row_id_column(db)
    select = f"{ROW_ID_SELECTS[rowid]}, *" if rowid else "*"
    # driver-level SQL, so no bind-parameter escaping of the identifier
    quoted = db.get_bind().dialect.identifier_preparer.quote_identifier(table)
    result = execute_admin_query(db, f"SELECT {select} FROM {quoted} LIMIT {limit}")
    result["columns"] = columns_of(result, exclude=rowid)
    return result


def update_cell(db: Session, table: str, column: str, row: Mapping[str, Any], value) -> int:
    key = resolve_row_key(row, row_id_column(db))
    _ensure_table(db, table)
    _ensure_column(db, table, column)

    statement = (
        f"UPDATE {_quote(db, table)} SET {_quote(db, column)} = :value "
        f"WHERE {_key_condition(db, key)}"
    )
    updated = _run(db, statement, {"value": value, "row_key": key.value})
    if not updated:
        raise NotFoundError("Row not found")

    logger.info(f"✏️ [DB browser] {table}.{column} updated where {key.column}={key.value}")
    return updated


def delete_row(db: Session, table: str, row: Mapping[str, Any]) -> int:
    key = resolve_row_key(row, row_id_column(db))
    _ensure_table(db, table)

    statement = f"DELETE FROM {_quote(db, table)} WHERE {_key_condition(db, key)}"
    deleted = _run(db, statement, {"row_key": key.value})
    if not deleted:
        raise NotFoundError("Row not found")

    logger.info(f"🗑️ [DB browser] {table} row deleted where {key.column}={key.value}")
    return deleted


def add_column(db: Session, table: str, name: str, column_type: str):
    if not name or not name.strip():
        raise ValidationError("Column name is required")
    if column_type not in COLUMN_TYPES:
        raise ValidationError(f"Column type must be one of: {', '.join(COLUMN_TYPES)}")
    _ensure_table(db, table)

    _run(db, f"ALTER TABLE {_quote(db, table)} ADD COLUMN {_quote(db, name)} {column_type}")
    logger.info(f"➕ [DB browser] Added column {table}.{name} {column_type}")


def drop_column(db: Session, table: str, name: str):
    _ensure_table(db, table)
    _ensure_column(db, table, name)

    _run(db, f"ALTER TABLE {_quote(db, table)} DROP COLUMN {_quote(db, name)}")
    logger.info(f"➖ [DB browser] Dropped column {table}.{name}")
