# File: gormgen/introspect.py
"""
gormgen - Schema Introspector
=============================
Reads ``INFORMATION_SCHEMA`` through an explicitly passed SQLAlchemy
``Connection`` and builds the frozen ``Table``/``Column`` model.

Queries issued (all read-only):

    TABLES            name + comment, by schema, optional name filter
    COLUMNS           per table, ordered by ORDINAL_POSITION
    KEY_COLUMN_USAGE  PRIMARY constraint columns, ordered by ORDINAL_POSITION

Every column passes through ``gormgen.typemap.resolve_column`` before it is
returned.  Any database error is re-raised as ``IntrospectionError``.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from gormgen.errors import IntrospectionError
from gormgen.models import Column, RawColumn, Table
from gormgen.typemap import TagOptions, resolve_column

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gormgen.introspect")

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_TABLES_SQL: str = """
    SELECT TABLE_NAME, TABLE_COMMENT
    FROM INFORMATION_SCHEMA.TABLES
    WHERE TABLE_SCHEMA = :schema
    {name_filter}
    ORDER BY TABLE_NAME
"""

_COLUMNS_SQL = text(
    """
    SELECT COLUMN_NAME, COLUMN_TYPE, COLUMN_COMMENT, IS_NULLABLE,
           COLUMN_KEY, EXTRA, COLUMN_DEFAULT
    FROM INFORMATION_SCHEMA.COLUMNS
    WHERE TABLE_SCHEMA = :schema AND TABLE_NAME = :table
    ORDER BY ORDINAL_POSITION
    """
)

_PRIMARY_KEYS_SQL = text(
    """
    SELECT COLUMN_NAME
    FROM INFORMATION_SCHEMA.KEY_COLUMN_USAGE
    WHERE TABLE_SCHEMA = :schema AND TABLE_NAME = :table
      AND CONSTRAINT_NAME = 'PRIMARY'
    ORDER BY ORDINAL_POSITION
    """
)


def _str(value: Any) -> str:
    """NULL-safe string conversion for metadata cells."""
    return "" if value is None else str(value)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_tables(
    conn: Connection,
    schema: str,
    table_filter: Optional[Sequence[str]] = None,
) -> List[Table]:
    """
    List the tables of *schema*, optionally restricted to *table_filter*.

    Result order is the metadata store's (``ORDER BY TABLE_NAME``), not the
    order of the filter.  Columns and keys are not populated.
    """
    names: List[str] = [n for n in (table_filter or []) if n]
    if names:
        stmt = text(
            _TABLES_SQL.format(name_filter="AND TABLE_NAME IN :names")
        ).bindparams(bindparam("names", expanding=True))
        params: dict = {"schema": schema, "names": names}
    else:
        stmt = text(_TABLES_SQL.format(name_filter=""))
        params = {"schema": schema}

    try:
        rows = conn.execute(stmt, params).fetchall()
    except SQLAlchemyError as exc:
        raise IntrospectionError(f"listing tables of '{schema}' failed: {exc}") from exc

    tables: List[Table] = [Table(name=_str(r[0]), comment=_str(r[1])) for r in rows]
    logger.info("Found %d table(s) in schema '%s'.", len(tables), schema)
    return tables


def list_columns(
    conn: Connection,
    schema: str,
    table_name: str,
    options: Optional[TagOptions] = None,
) -> List[Column]:
    """Return the resolved columns of one table in physical order."""
    try:
        rows = conn.execute(
            _COLUMNS_SQL, {"schema": schema, "table": table_name}
        ).fetchall()
    except SQLAlchemyError as exc:
        raise IntrospectionError(
            f"listing columns of '{schema}.{table_name}' failed: {exc}"
        ) from exc

    columns: List[Column] = []
    for row in rows:
        raw: RawColumn = RawColumn(
            name=_str(row[0]),
            raw_type=_str(row[1]),
            comment=_str(row[2]),
            is_nullable=_str(row[3]).upper() == "YES",
            is_primary_key=_str(row[4]).upper() == "PRI",
            is_auto_increment="auto_increment" in _str(row[5]).lower(),
            default_value=_str(row[6]),
        )
        columns.append(resolve_column(raw, options))
    return columns


def list_primary_keys(conn: Connection, schema: str, table_name: str) -> List[str]:
    """Primary-key column names in key-ordinal order."""
    try:
        rows = conn.execute(
            _PRIMARY_KEYS_SQL, {"schema": schema, "table": table_name}
        ).fetchall()
    except SQLAlchemyError as exc:
        raise IntrospectionError(
            f"listing primary keys of '{schema}.{table_name}' failed: {exc}"
        ) from exc
    return [_str(r[0]) for r in rows]


def load_schema(
    conn: Connection,
    schema: str,
    table_filter: Optional[Sequence[str]] = None,
    options: Optional[TagOptions] = None,
) -> List[Table]:
    """Tables, then columns and primary keys for each, fully populated."""
    loaded: List[Table] = []
    for table in list_tables(conn, schema, table_filter):
        columns: List[Column] = list_columns(conn, schema, table.name, options)
        keys: List[str] = list_primary_keys(conn, schema, table.name)
        loaded.append(
            table.model_copy(update={"columns": tuple(columns), "primary_keys": tuple(keys)})
        )
        logger.debug(
            "Loaded table '%s': %d columns, primary key %s.",
            table.name,
            len(columns),
            keys,
        )
    return loaded


__all__: List[str] = [
    "list_tables",
    "list_columns",
    "list_primary_keys",
    "load_schema",
]
