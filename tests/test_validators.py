"""
tests/test_validators.py
Unit tests for gormgen.validators.

Tests cover:
- ValidationResult accumulation and summaries
- Primary-key shape checks (missing, composite)
- Column and table name checks
- Requested-table checks against the loaded schema
- The aggregate validate_tables entry point
"""

from __future__ import annotations

from typing import List

import pytest

from gormgen.models import Table
from gormgen.validators import (
    ValidationError,
    ValidationResult,
    validate_columns,
    validate_primary_keys,
    validate_requested,
    validate_tables,
)

from tests.conftest import ColumnSpec, make_table

_ID: ColumnSpec = ("id", "int(11)", False, "PRI", "auto_increment", "")


# ===========================================================================
# ValidationResult
# ===========================================================================


class TestValidationResult:
    """Tests for the finding container."""

    def test_empty(self) -> None:
        result = ValidationResult()
        assert len(result) == 0
        assert not result.has_warnings
        assert result.warning_count == 0

    def test_warning_and_info(self) -> None:
        result = ValidationResult()
        result.add_warning("W1", "first")
        result.add_info("I1", "second", {"k": 1})
        assert len(result) == 2
        assert result.warning_count == 1
        assert result.codes() == ["W1", "I1"]
        assert result.all_items[1].context == {"k": 1}
        assert "1 warning(s)" in result.summary()

    def test_merge(self) -> None:
        a, b = ValidationResult(), ValidationResult()
        a.add_warning("A", "a")
        b.add_warning("B", "b")
        a.merge(b)
        assert a.codes() == ["A", "B"]

    def test_error_str(self) -> None:
        item = ValidationError("warning", "NO_PRIMARY_KEY", "missing")
        assert str(item) == "[WARNING] NO_PRIMARY_KEY: missing"
        assert item.is_warning


# ===========================================================================
# Primary keys
# ===========================================================================


class TestPrimaryKeys:
    """Tests for validate_primary_keys."""

    def test_single_key_passes(self, users_table: Table) -> None:
        assert len(validate_primary_keys([users_table])) == 0

    def test_missing_key(self) -> None:
        table = make_table("logs", [("line", "text", True, "", "", "")])
        result = validate_primary_keys([table])
        assert result.codes() == ["NO_PRIMARY_KEY"]
        assert result.warnings[0].context == {"table": "logs"}

    def test_composite_key(self) -> None:
        table = make_table(
            "memberships",
            [
                ("user_id", "int", False, "PRI", "", ""),
                ("group_id", "int", False, "PRI", "", ""),
            ],
        )
        result = validate_primary_keys([table])
        assert result.codes() == ["COMPOSITE_PRIMARY_KEY"]
        assert result.warnings[0].context["primary_keys"] == ["user_id", "group_id"]


# ===========================================================================
# Names
# ===========================================================================


class TestColumns:
    """Tests for validate_columns."""

    def test_clean_tables(self, users_table: Table, orders_table: Table) -> None:
        assert not validate_columns([users_table, orders_table]).has_warnings

    def test_no_columns(self) -> None:
        result = validate_columns([make_table("empty", [])])
        assert "NO_COLUMNS" in result.codes()

    @pytest.mark.parametrize("name", ["user-logs", "2fa", "order items"])
    def test_invalid_table_name(self, name: str) -> None:
        result = validate_columns([make_table(name, [_ID])])
        assert result.codes() == ["INVALID_TABLE_NAME"]

    def test_invalid_column_name(self) -> None:
        table = make_table("events", [_ID, ("2fa_code", "varchar(6)", True, "", "", "")])
        result = validate_columns([table])
        assert result.codes() == ["INVALID_COLUMN_NAME"]
        assert result.warnings[0].context == {"table": "events", "column": "2fa_code"}


class TestRequested:
    """Tests for validate_requested."""

    def test_no_filter(self, users_table: Table) -> None:
        assert len(validate_requested([users_table], None)) == 0
        assert len(validate_requested([users_table], [])) == 0

    def test_missing_table(self, users_table: Table) -> None:
        result = validate_requested([users_table], ["users", "ghosts"])
        assert result.codes() == ["TABLE_NOT_FOUND"]
        assert "ghosts" in result.warnings[0].message


# ===========================================================================
# Aggregate
# ===========================================================================


class TestValidateTables:
    """Tests for validate_tables."""

    def test_clean_schema(
        self, users_table: Table, orders_table: Table, metrics_table: Table
    ) -> None:
        result = validate_tables([users_table, orders_table, metrics_table])
        assert not result.has_warnings
        assert result.codes() == ["SCHEMA_SIZE"]
        assert "3 table(s), 13 column(s)" in result.all_items[0].message

    def test_collects_every_check(self, users_table: Table) -> None:
        keyless = make_table("audit-log", [("line", "text", True, "", "", "")])
        result = validate_tables([users_table, keyless], requested=["users", "missing"])
        codes: List[str] = result.codes()
        assert codes == [
            "TABLE_NOT_FOUND",
            "NO_PRIMARY_KEY",
            "INVALID_TABLE_NAME",
            "SCHEMA_SIZE",
        ]
        assert result.warning_count == 3
