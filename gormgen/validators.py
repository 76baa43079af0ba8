# File: gormgen/validators.py
"""
gormgen - Schema Sanity Checks
==============================
Cross-table checks run once the schema is loaded and before any code is
rendered.  They never abort a run: every finding is a warning that tells the
user which generated code will be wrong or missing.

Usage by the orchestrator:
    from gormgen.validators import validate_tables
    result = validate_tables(tables, requested=settings.table_names())
    for item in result.warnings:
        logger.warning("%s", item)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Set

from gormgen.models import Table
from gormgen.naming import to_type_name
from gormgen.utils import is_go_identifier

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gormgen.validators")

# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationError:
    """Lightweight finding descriptor (no Pydantic overhead)."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level  # "warning" | "info"
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    def __str__(self) -> str:
        return self.__repr__()


class ValidationResult:
    """Accumulates ``ValidationError`` instances produced by the checks."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationError] = []

    # -- Mutation -----------------------------------------------------------

    def add_warning(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationError("warning", code, message, context))

    def add_info(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationError("info", code, message, context))

    def merge(self, other: "ValidationResult") -> None:
        self._items.extend(other._items)

    # -- Query --------------------------------------------------------------

    @property
    def warnings(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_warning]

    @property
    def all_items(self) -> List[ValidationError]:
        return list(self._items)

    @property
    def has_warnings(self) -> bool:
        return any(e.is_warning for e in self._items)

    @property
    def warning_count(self) -> int:
        return sum(1 for e in self._items if e.is_warning)

    def codes(self) -> List[str]:
        return [e.code for e in self._items]

    def summary(self) -> str:
        return (
            f"Sanity checks: {self.warning_count} warning(s), "
            f"{len(self._items)} total item(s)."
        )

    def __repr__(self) -> str:
        return f"<ValidationResult {self.summary()}>"

    def __len__(self) -> int:
        return len(self._items)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def validate_primary_keys(tables: Sequence[Table]) -> ValidationResult:
    """
    Flag tables whose key shape the generated ``GetByID``/``Delete`` cannot
    serve: no primary key at all, or a composite one.
    """
    result: ValidationResult = ValidationResult()
    for table in tables:
        ctx: Dict[str, Any] = {"table": table.name}
        if not table.primary_keys:
            result.add_warning(
                "NO_PRIMARY_KEY",
                f"Table '{table.name}' has no primary key; "
                f"generated lookups by id will not work.",
                ctx,
            )
        elif table.has_composite_pk:
            result.add_warning(
                "COMPOSITE_PRIMARY_KEY",
                f"Table '{table.name}' has a composite primary key "
                f"{list(table.primary_keys)}; only the single-column form is supported.",
                {**ctx, "primary_keys": list(table.primary_keys)},
            )
    return result


def validate_columns(tables: Sequence[Table]) -> ValidationResult:
    """Flag tables without columns and names that cannot become Go identifiers."""
    result: ValidationResult = ValidationResult()
    for table in tables:
        ctx: Dict[str, Any] = {"table": table.name}
        if not table.columns:
            result.add_warning(
                "NO_COLUMNS",
                f"Table '{table.name}' has no columns; an empty struct will be emitted.",
                ctx,
            )

        if not is_go_identifier(to_type_name(table.name)):
            result.add_warning(
                "INVALID_TABLE_NAME",
                f"Table name '{table.name}' does not map to a Go identifier; "
                f"the table will be skipped.",
                ctx,
            )

        for column in table.columns:
            if not is_go_identifier(to_type_name(column.name)):
                result.add_warning(
                    "INVALID_COLUMN_NAME",
                    f"Column '{table.name}.{column.name}' does not map to a Go identifier.",
                    {**ctx, "column": column.name},
                )
    return result


def validate_requested(
    tables: Sequence[Table],
    requested: Optional[Sequence[str]] = None,
) -> ValidationResult:
    """Flag filter names the metadata store did not return."""
    result: ValidationResult = ValidationResult()
    if not requested:
        return result

    found: Set[str] = {t.name for t in tables}
    for name in requested:
        if name not in found:
            result.add_warning(
                "TABLE_NOT_FOUND",
                f"Requested table '{name}' was not found in the schema.",
                {"table": name},
            )
    return result


# ---------------------------------------------------------------------------
# Aggregate entry point
# ---------------------------------------------------------------------------


def validate_tables(
    tables: Sequence[Table],
    requested: Optional[Sequence[str]] = None,
) -> ValidationResult:
    """Run every sanity check over the loaded tables."""
    result: ValidationResult = ValidationResult()
    result.merge(validate_requested(tables, requested))
    result.merge(validate_primary_keys(tables))
    result.merge(validate_columns(tables))
    result.add_info(
        "SCHEMA_SIZE",
        f"{len(tables)} table(s), {sum(len(t.columns) for t in tables)} column(s).",
    )
    logger.debug(result.summary())
    return result


__all__: List[str] = [
    "ValidationError",
    "ValidationResult",
    "validate_primary_keys",
    "validate_columns",
    "validate_requested",
    "validate_tables",
]
