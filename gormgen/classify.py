# File: gormgen/classify.py
"""
gormgen - Field Classifier
==========================
Derives the three field subsets that switch optional code on and off:

    unique_fields      → ``GetBy<Field>`` accessors + conflict checks on create
    search_fields      → ``Search`` method + ``GET /search`` route
    updateable_fields  → field-copy section of the update handler

Every rule is a naming/comment heuristic, not a reading of the real unique
indexes, so false positives and negatives are expected.  Each subset comes
from its own pure function over a column sequence.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from gormgen.models import Column, FieldRef
from gormgen.naming import to_type_name, to_variable_name
from gormgen.typemap import GO_STRING, zero_value

logger: logging.Logger = logging.getLogger("gormgen.classify")

# ---------------------------------------------------------------------------
# Heuristic tokens
# ---------------------------------------------------------------------------

UNIQUE_NAME_TOKENS: Tuple[str, ...] = ("username", "email", "phone")
UNIQUE_COMMENT_MARKERS: Tuple[str, ...] = ("唯一", "unique")

# "id" also matches non-key names such as "paid_amount" or "width".
NON_UPDATEABLE_TOKENS: Tuple[str, ...] = ("created_at", "id")


def to_field_ref(column: Column) -> FieldRef:
    """Project a column onto the names the templates use."""
    return FieldRef(
        go_name=to_type_name(column.name),
        var_name=to_variable_name(column.name),
        go_type=column.go_type,
        db_name=column.name,
        comment=column.comment,
        zero_value=zero_value(column.go_type),
        tag=column.go_tag,
    )


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_unique_candidate(column: Column) -> bool:
    name: str = column.name.lower()
    comment: str = column.comment.lower()
    if any(token in name for token in UNIQUE_NAME_TOKENS):
        return True
    return any(marker in comment for marker in UNIQUE_COMMENT_MARKERS)


def is_searchable(column: Column) -> bool:
    return column.go_type == GO_STRING or GO_STRING in column.go_type


def is_updateable(column: Column) -> bool:
    if column.is_primary_key:
        return False
    name: str = column.name.lower()
    return not any(token in name for token in NON_UPDATEABLE_TOKENS)


# ---------------------------------------------------------------------------
# Subsets
# ---------------------------------------------------------------------------


def _select(columns: Iterable[Column], predicate) -> Tuple[FieldRef, ...]:
    return tuple(to_field_ref(c) for c in columns if predicate(c))


def unique_fields(columns: Sequence[Column]) -> Tuple[FieldRef, ...]:
    """Columns whose name or comment suggests a unique value."""
    return _select(columns, is_unique_candidate)


def search_fields(columns: Sequence[Column]) -> Tuple[FieldRef, ...]:
    """Columns mapped to a textual Go type."""
    return _select(columns, is_searchable)


def updateable_fields(columns: Sequence[Column]) -> Tuple[FieldRef, ...]:
    """Columns the update handler copies from the request body."""
    return _select(columns, is_updateable)


__all__: List[str] = [
    "UNIQUE_NAME_TOKENS",
    "UNIQUE_COMMENT_MARKERS",
    "NON_UPDATEABLE_TOKENS",
    "to_field_ref",
    "is_unique_candidate",
    "is_searchable",
    "is_updateable",
    "unique_fields",
    "search_fields",
    "updateable_fields",
]
