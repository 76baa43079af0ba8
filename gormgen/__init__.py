# File: gormgen/__init__.py
"""
gormgen - GORM Code Generator
=============================

Reads table metadata from a MySQL server and writes Go sources for three
layers: GORM record structs, persistence services and gin routers.

Architecture overview::

    ┌──────────────┐     ┌────────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ CodeGenerator  │────▶│ TemplateRenderer │
    │   (cli.py)   │     │ (generator.py) │     │  (templates.py)  │
    └──────────────┘     └───────┬────────┘     └──────────────────┘
                                 │
                 ┌───────────────┼───────────────┐
                 ▼               ▼               ▼
          ┌────────────┐  ┌────────────┐  ┌────────────┐
          │ introspect │  │ validators │  │ exporters  │
          │   (.py)    │  │   (.py)    │  │   (.py)    │
          └────────────┘  └────────────┘  └────────────┘

Usage::

    # As a library
    from gormgen import CodeGenerator, resolve_settings
    settings = resolve_settings({"database": "shop", "generate_service": True})
    report = CodeGenerator(settings).run()
    print(report.summary())

    # From the command line
    python -m gormgen --database shop --service --router -v
"""

from __future__ import annotations

__version__: str = "0.1.0"

from gormgen.config import ConfigFile, Settings, load_config_file, merge_config, resolve_settings
from gormgen.errors import (
    ConfigurationError,
    GormgenError,
    IntrospectionError,
    SetupError,
    TableGenerationError,
    TemplateRenderError,
)
from gormgen.exporters import EmissionSink, FileRecord
from gormgen.generator import CodeGenerator, GenerationReport, GenerationState, TableOutcome
from gormgen.introspect import load_schema
from gormgen.models import ArtifactKind, Column, ResolvedTableModel, Table
from gormgen.naming import to_delimited, to_type_name, to_variable_name
from gormgen.templates import TemplateRenderer
from gormgen.typemap import map_type
from gormgen.validators import ValidationResult, validate_tables

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    "__version__",
    # Orchestrator
    "CodeGenerator",
    "GenerationReport",
    "GenerationState",
    "TableOutcome",
    # Configuration
    "ConfigFile",
    "Settings",
    "load_config_file",
    "merge_config",
    "resolve_settings",
    # Errors
    "GormgenError",
    "ConfigurationError",
    "SetupError",
    "IntrospectionError",
    "TableGenerationError",
    "TemplateRenderError",
    # Models
    "ArtifactKind",
    "Column",
    "Table",
    "ResolvedTableModel",
    # Pipeline pieces
    "load_schema",
    "map_type",
    "to_type_name",
    "to_variable_name",
    "to_delimited",
    "TemplateRenderer",
    "EmissionSink",
    "FileRecord",
    "validate_tables",
    "ValidationResult",
]
