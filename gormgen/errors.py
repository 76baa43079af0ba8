# File: gormgen/errors.py
"""
gormgen - Error Taxonomy
========================

Every failure the pipeline can raise derives from ``GormgenError``.  The
orchestrator decides what is fatal by class, not by message:

    GormgenError
    ├── ConfigurationError     fatal, raised before any database work
    ├── SetupError             fatal, connection / output-tree preparation
    ├── IntrospectionError     fatal, any metadata query failure
    └── TableGenerationError   recovered per table
        └── TemplateRenderError
"""

from __future__ import annotations

from typing import List, Optional


class GormgenError(Exception):
    """Base class for all gormgen errors."""


class ConfigurationError(GormgenError):
    """The resolved settings are unusable (e.g. no database named)."""


class SetupError(GormgenError):
    """Opening the connection or preparing the output tree failed."""


class IntrospectionError(GormgenError):
    """A metadata query failed; the schema model would be incomplete."""


class TableGenerationError(GormgenError):
    """Rendering or emitting one table's artifact failed."""

    def __init__(self, table_name: str, message: str) -> None:
        super().__init__(f"table '{table_name}': {message}")
        self.table_name: str = table_name


class TemplateRenderError(TableGenerationError):
    """A derived identifier cannot be emitted as Go source."""

    def __init__(
        self,
        table_name: str,
        message: str,
        identifier: Optional[str] = None,
    ) -> None:
        super().__init__(table_name, message)
        self.identifier: Optional[str] = identifier


__all__: List[str] = [
    "GormgenError",
    "ConfigurationError",
    "SetupError",
    "IntrospectionError",
    "TableGenerationError",
    "TemplateRenderError",
]
