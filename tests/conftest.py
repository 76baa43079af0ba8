"""
tests/conftest.py
Shared fixtures for the gormgen test suite.

The introspection and end-to-end tests run the production SQL unchanged
against an in-memory SQLite database with an attached ``information_schema``
database holding ``TABLES``, ``COLUMNS`` and ``KEY_COLUMN_USAGE``.
No external mocking libraries are used; generated files are written into
pytest's ``tmp_path``.
"""

from __future__ import annotations

import pathlib
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import pytest
import yaml
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from gormgen.config import Settings
from gormgen.models import Column, RawColumn, Table
from gormgen.typemap import resolve_column

SCHEMA_NAME: str = "shop"

# (name, column type, nullable, column key, extra, comment)
ColumnSpec = Tuple[str, str, bool, str, str, str]


# ---------------------------------------------------------------------------
# Metadata store
# ---------------------------------------------------------------------------

_METADATA_DDL: Tuple[str, ...] = (
    """
    CREATE TABLE information_schema.TABLES (
        TABLE_SCHEMA TEXT, TABLE_NAME TEXT, TABLE_COMMENT TEXT
    )
    """,
    """
    CREATE TABLE information_schema.COLUMNS (
        TABLE_SCHEMA TEXT, TABLE_NAME TEXT, COLUMN_NAME TEXT,
        ORDINAL_POSITION INTEGER, COLUMN_TYPE TEXT, COLUMN_COMMENT TEXT,
        IS_NULLABLE TEXT, COLUMN_KEY TEXT, EXTRA TEXT, COLUMN_DEFAULT TEXT
    )
    """,
    """
    CREATE TABLE information_schema.KEY_COLUMN_USAGE (
        TABLE_SCHEMA TEXT, TABLE_NAME TEXT, COLUMN_NAME TEXT,
        CONSTRAINT_NAME TEXT, ORDINAL_POSITION INTEGER
    )
    """,
)


class MetadataStore:
    """Populates the fake ``information_schema`` one table at a time."""

    def __init__(self, engine: Engine, schema: str = SCHEMA_NAME) -> None:
        self.engine: Engine = engine
        self.schema: str = schema

    def add_table(
        self,
        name: str,
        columns: Sequence[ColumnSpec],
        comment: str = "",
        primary_keys: Optional[Sequence[str]] = None,
        schema: Optional[str] = None,
    ) -> None:
        schema = schema or self.schema
        keys: List[str] = (
            list(primary_keys)
            if primary_keys is not None
            else [c[0] for c in columns if c[3] == "PRI"]
        )
        with self.engine.begin() as conn:
            conn.exec_driver_sql(
                "INSERT INTO information_schema.TABLES VALUES (?, ?, ?)",
                (schema, name, comment),
            )
            for position, (col_name, col_type, nullable, key, extra, col_comment) in enumerate(
                columns, start=1
            ):
                conn.exec_driver_sql(
                    "INSERT INTO information_schema.COLUMNS "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, NULL)",
                    (
                        schema,
                        name,
                        col_name,
                        position,
                        col_type,
                        col_comment,
                        "YES" if nullable else "NO",
                        key,
                        extra,
                    ),
                )
            for position, key_name in enumerate(keys, start=1):
                conn.exec_driver_sql(
                    "INSERT INTO information_schema.KEY_COLUMN_USAGE "
                    "VALUES (?, ?, ?, 'PRIMARY', ?)",
                    (schema, name, key_name, position),
                )


@pytest.fixture()
def metadata_engine() -> Iterator[Engine]:
    """SQLite engine with an empty ``information_schema`` attached."""
    engine: Engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _attach(dbapi_connection: Any, _record: Any) -> None:
        dbapi_connection.execute("ATTACH DATABASE ':memory:' AS information_schema")

    with engine.begin() as conn:
        for ddl in _METADATA_DDL:
            conn.exec_driver_sql(ddl)

    yield engine
    engine.dispose()


@pytest.fixture()
def metadata_store(metadata_engine: Engine) -> MetadataStore:
    return MetadataStore(metadata_engine)


# ---------------------------------------------------------------------------
# Table definitions
# ---------------------------------------------------------------------------

USERS_COLUMNS: List[ColumnSpec] = [
    ("id", "int(11)", False, "PRI", "auto_increment", ""),
    ("username", "varchar(50)", False, "", "", "login name"),
    ("email", "varchar(100)", True, "", "", ""),
    ("created_at", "datetime", True, "", "", ""),
]

ORDERS_COLUMNS: List[ColumnSpec] = [
    ("id", "bigint(20) unsigned", False, "PRI", "auto_increment", ""),
    ("order_no", "varchar(32)", False, "", "", "order number, unique"),
    ("user_id", "int(11)", False, "", "", ""),
    ("amount", "decimal(10,2)", False, "", "", ""),
    ("paid_at", "datetime", True, "", "", ""),
]

METRICS_COLUMNS: List[ColumnSpec] = [
    ("id", "int(11)", False, "PRI", "auto_increment", ""),
    ("value", "double", False, "", "", ""),
    ("is_active", "tinyint(1)", False, "", "", ""),
    ("recorded_at", "timestamp", False, "", "", ""),
]


@pytest.fixture()
def shop_store(metadata_store: MetadataStore) -> MetadataStore:
    """``users``, ``orders`` and ``metrics`` in schema ``shop``, plus a foreign schema."""
    metadata_store.add_table("users", USERS_COLUMNS, comment="users")
    metadata_store.add_table("orders", ORDERS_COLUMNS, comment="orders")
    metadata_store.add_table("metrics", METRICS_COLUMNS)
    metadata_store.add_table("users", USERS_COLUMNS, schema="other")
    return metadata_store


def make_table(
    name: str,
    columns: Sequence[ColumnSpec],
    comment: str = "",
    primary_keys: Optional[Sequence[str]] = None,
) -> Table:
    """Build a resolved ``Table`` without going through a database."""
    resolved: List[Column] = [
        resolve_column(
            RawColumn(
                name=col_name,
                raw_type=col_type,
                comment=col_comment,
                is_nullable=nullable,
                is_primary_key=key == "PRI",
                is_auto_increment="auto_increment" in extra,
            )
        )
        for col_name, col_type, nullable, key, extra, col_comment in columns
    ]
    keys: Tuple[str, ...] = (
        tuple(primary_keys)
        if primary_keys is not None
        else tuple(c[0] for c in columns if c[3] == "PRI")
    )
    return Table(name=name, comment=comment, columns=tuple(resolved), primary_keys=keys)


@pytest.fixture()
def users_table() -> Table:
    return make_table("users", USERS_COLUMNS, comment="users")


@pytest.fixture()
def orders_table() -> Table:
    return make_table("orders", ORDERS_COLUMNS, comment="orders")


@pytest.fixture()
def metrics_table() -> Table:
    return make_table("metrics", METRICS_COLUMNS)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings(tmp_path: pathlib.Path) -> Settings:
    """All layers enabled, output under ``tmp_path/internal``."""
    return Settings(
        database=SCHEMA_NAME,
        output_path=str(tmp_path / "internal" / "models"),
        generate_service=True,
        generate_router=True,
        model_import_path="github.com/acme/shop/internal/models",
        service_import_path="github.com/acme/shop/internal/services",
        storage_import_path="github.com/acme/shop/internal/storage",
    )


@pytest.fixture()
def config_yaml_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """A complete config file in the documented layout."""
    data: Dict[str, Any] = {
        "database": {
            "host": "db.internal",
            "port": 3307,
            "user": "gen",
            "password": "secret",
            "database": "shop",
        },
        "output": {"path": "out/models", "package": "entity"},
        "tables": "users,orders",
        "options": {
            "generate_base_model": False,
            "use_soft_delete": False,
            "generate_json_tags": True,
            "generate_gorm_tags": True,
            "generate_comments": False,
            "generate_router": True,
            "generate_service": True,
        },
        "router": {"output": "out/router"},
        "service": {"output": "out/services"},
        "imports": {
            "model": "example.com/app/out/models",
            "service": "example.com/app/out/services",
            "storage": "example.com/app/storage",
        },
    }
    path = tmp_path / "config.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(data, fh, default_flow_style=False, allow_unicode=True)
    return path
