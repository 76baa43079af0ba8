# File: gormgen/models.py
"""
gormgen - Core Data Models
==========================
Pydantic V2 models for the introspected schema plus the plain dataclasses the
templates consume.  These models form the single source of truth for the
pipeline: Introspection → Type Mapping → Classification → Rendering.

Lifecycle:
    - ``RawColumn`` is one row of ``INFORMATION_SCHEMA.COLUMNS``.
    - ``Column`` adds the Go type and struct tag, computed exactly once by
      ``gormgen.typemap.resolve_column`` and frozen afterwards.
    - ``Table`` is built once per run by the introspector and never mutated.
    - ``ResolvedTableModel`` is built per table right before rendering and
      discarded afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gormgen.models")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ArtifactKind(str, Enum):
    """The three per-table layers the renderer can emit."""

    RECORD = "record"
    SERVICE = "service"
    ROUTER = "router"


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_FROZEN_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    frozen=True,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Column annotations
# ---------------------------------------------------------------------------


class ColumnAnnotation(BaseModel):
    """
    The two independent struct-tag families of a column.

    ``gorm`` holds the ``;``-joined persistence markers (without the
    ``gorm:"..."`` wrapper), ``json`` the wire name.
    """

    model_config = _FROZEN_CONFIG

    gorm: str = Field(..., min_length=1, description="GORM tag body.")
    json_name: str = Field(..., description="JSON field name.")

    def render(self, gorm: bool = True, json: bool = True) -> str:
        """Return the Go struct tag with either family switched off."""
        parts: List[str] = []
        if gorm:
            parts.append(f'gorm:"{self.gorm}"')
        if json:
            parts.append(f'json:"{self.json_name}"')
        return " ".join(parts)


# ---------------------------------------------------------------------------
# Schema primitives
# ---------------------------------------------------------------------------


class RawColumn(BaseModel):
    """A column exactly as reported by the metadata store."""

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1, description="Column name.")
    raw_type: str = Field(default="", description="COLUMN_TYPE, e.g. varchar(50).")
    comment: str = Field(default="", description="COLUMN_COMMENT.")
    is_nullable: bool = Field(default=True, description="IS_NULLABLE = 'YES'.")
    is_primary_key: bool = Field(default=False, description="COLUMN_KEY = 'PRI'.")
    is_auto_increment: bool = Field(
        default=False, description="EXTRA contains auto_increment."
    )
    default_value: str = Field(default="", description="COLUMN_DEFAULT.")


class Column(RawColumn):
    """A column with its resolved Go type and struct tag."""

    go_type: str = Field(..., min_length=1, description="Resolved Go type.")
    annotation: ColumnAnnotation = Field(..., description="Both tag families.")
    go_tag: str = Field(..., min_length=1, description="Full rendered struct tag.")

    def __repr__(self) -> str:
        pk_flag: str = " PK" if self.is_primary_key else ""
        null_flag: str = " NULL" if self.is_nullable else " NOT NULL"
        return f"<Column {self.name} {self.raw_type}{pk_flag}{null_flag} -> {self.go_type}>"


class Table(BaseModel):
    """
    One table of the introspected schema.

    ``primary_keys`` keeps key-ordinal order.  Only single-column keys are
    consumed by the templates; composite keys are flagged by the validators.
    """

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1, description="Table name.")
    comment: str = Field(default="", description="TABLE_COMMENT.")
    columns: Tuple[Column, ...] = Field(default=(), description="Ordered columns.")
    primary_keys: Tuple[str, ...] = Field(
        default=(), description="Primary-key columns in ordinal order."
    )

    @computed_field  # type: ignore[misc]
    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    @computed_field  # type: ignore[misc]
    @property
    def has_composite_pk(self) -> bool:
        return len(self.primary_keys) > 1

    def __repr__(self) -> str:
        return f"<Table {self.name} ({len(self.columns)} cols, pk={list(self.primary_keys)})>"


# ---------------------------------------------------------------------------
# Template input
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FieldRef:
    """A column as the templates reference it."""

    go_name: str
    var_name: str
    go_type: str
    db_name: str
    comment: str
    zero_value: str
    tag: str = ""


@dataclass(frozen=True, slots=True)
class ResolvedTableModel:
    """
    Everything the three templates need for one table.

    Built once per table by ``TemplateRenderer.build_model``; the record,
    service and router templates all read the same instance.
    """

    table_name: str
    comment: str
    type_name: str
    var_name: str
    file_stem: str
    route_path: str
    service_name: str
    service_var_name: str
    handler_name: str
    route_group: str
    record_fields: Tuple[FieldRef, ...]
    unique_fields: Tuple[FieldRef, ...]
    search_fields: Tuple[FieldRef, ...]
    updateable_fields: Tuple[FieldRef, ...]
    embed_base: bool
    needs_time_import: bool

    @property
    def has_unique_fields(self) -> bool:
        return len(self.unique_fields) > 0

    @property
    def has_search_fields(self) -> bool:
        return len(self.search_fields) > 0


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ArtifactKind",
    "ColumnAnnotation",
    "RawColumn",
    "Column",
    "Table",
    "FieldRef",
    "ResolvedTableModel",
]

logger.debug("gormgen.models loaded - %d public symbols.", len(__all__))
