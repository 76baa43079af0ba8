# File: gormgen/typemap.py
"""
gormgen - Type Mapper
=====================
Maps a raw MySQL column type to a Go type and builds the column's struct
tags.

Matching is **substring containment** against an ordered rule list, so the
order is significant: ``bigint`` must be tried before ``int``, ``datetime``
before ``date``.  Anything unmatched falls through to ``string``.

Nullable columns become pointers (``*int64``, ``*time.Time``) except for
``string`` and ``[]byte``, which already have a usable zero value and are
never wrapped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from gormgen.models import Column, ColumnAnnotation, RawColumn
from gormgen.naming import to_delimited

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gormgen.typemap")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

GO_STRING: str = "string"
GO_BYTES: str = "[]byte"
GO_TIME: str = "time.Time"

# (substring, Go type); first match wins.
TYPE_RULES: Tuple[Tuple[str, str], ...] = (
    ("bigint", "int64"),
    ("int", "int"),
    ("decimal", "float64"),
    ("numeric", "float64"),
    ("float", "float64"),
    ("double", "float64"),
    ("datetime", GO_TIME),
    ("timestamp", GO_TIME),
    ("date", GO_TIME),
    ("text", GO_STRING),
    ("char", GO_STRING),
    ("blob", GO_BYTES),
    ("binary", GO_BYTES),
    ("bool", "bool"),
)

DEFAULT_GO_TYPE: str = GO_STRING

# Types that are never wrapped in a pointer.
_NULLABLE_SAFE: frozenset = frozenset({GO_STRING, GO_BYTES})

_SIZE_RE: re.Pattern[str] = re.compile(r"\((\d+)\)")


@dataclass(frozen=True, slots=True)
class TagOptions:
    """Switches that shape the GORM tag family."""

    include_comment: bool = True


# ---------------------------------------------------------------------------
# Type mapping
# ---------------------------------------------------------------------------


def map_type(raw_type: str, nullable: bool) -> str:
    """
    Return the Go type for a raw column type.

    Examples:
        >>> map_type("bigint unsigned", False)
        'int64'
        >>> map_type("datetime", True)
        '*time.Time'
        >>> map_type("varchar(100)", True)
        'string'
    """
    lowered: str = raw_type.lower()
    go_type: str = DEFAULT_GO_TYPE
    for pattern, candidate in TYPE_RULES:
        if pattern in lowered:
            go_type = candidate
            break

    if nullable and go_type not in _NULLABLE_SAFE:
        go_type = "*" + go_type
    return go_type


def extract_size(raw_type: str) -> int:
    """Return the ``(<digits>)`` length of a type, or 0 when absent."""
    match: Optional[re.Match[str]] = _SIZE_RE.search(raw_type)
    if match:
        return int(match.group(1))
    return 0


def zero_value(go_type: str) -> str:
    """Go zero-value literal used by the router's update-copy section."""
    if go_type == GO_STRING:
        return '""'
    if go_type in ("int", "int64"):
        return "0"
    if go_type == "float64":
        return "0.0"
    if go_type == "bool":
        return "false"
    if go_type == GO_TIME:
        return "time.Time{}"
    return "nil"


def _escape_tag_text(text: str) -> str:
    # Struct tags sit inside a raw string literal and a quoted value.
    return " ".join(text.replace("`", "'").replace('"', "'").split())


# ---------------------------------------------------------------------------
# Annotation building
# ---------------------------------------------------------------------------


def build_annotation(column: RawColumn, options: Optional[TagOptions] = None) -> ColumnAnnotation:
    """
    Assemble both tag families for *column*.

    GORM markers are emitted in a fixed order: column name, primary key,
    auto-increment, not null, size (char-like types only), comment.  The
    JSON family uses the delimited form of the column name.
    """
    opts: TagOptions = options or TagOptions()
    markers: List[str] = [f"column:{column.name}"]

    if column.is_primary_key:
        markers.append("primarykey")

    if column.is_auto_increment:
        markers.append("autoIncrement")

    if not column.is_nullable:
        markers.append("not null")

    if "char" in column.raw_type.lower():
        size: int = extract_size(column.raw_type)
        if size > 0:
            markers.append(f"size:{size}")

    if column.comment and opts.include_comment:
        markers.append(f"comment:{_escape_tag_text(column.comment)}")

    return ColumnAnnotation(
        gorm=";".join(markers),
        json_name=to_delimited(column.name),
    )


def resolve_column(raw: RawColumn, options: Optional[TagOptions] = None) -> Column:
    """Compute the Go type and tags for *raw* and return the frozen ``Column``."""
    go_type: str = map_type(raw.raw_type, raw.is_nullable)
    annotation: ColumnAnnotation = build_annotation(raw, options)
    column: Column = Column(
        **raw.model_dump(),
        go_type=go_type,
        annotation=annotation,
        go_tag=annotation.render(),
    )
    logger.debug("Resolved %r", column)
    return column


__all__: List[str] = [
    "GO_STRING",
    "GO_BYTES",
    "GO_TIME",
    "TYPE_RULES",
    "DEFAULT_GO_TYPE",
    "TagOptions",
    "map_type",
    "extract_size",
    "zero_value",
    "build_annotation",
    "resolve_column",
]
