# File: gormgen/generator.py
"""
gormgen - Pipeline Orchestrator
===============================

Connects every phase together:

    Connect → Introspect → Prepare output → Sanity checks → Per-table fold

State machine::

    IDLE → CONNECTED → TABLES_LOADED → GENERATING → DONE
      └──────────┴─────────────┴──→ ABORTED (fatal failure)

Error handling strategy:
    - Connection, ping, output-tree and shared base-file failures are
      ``SetupError``; metadata query failures are ``IntrospectionError``.
      Both abort the run and are recorded on the report, not raised.
    - Nothing is written until the schema has been read, so a run aborted
      by introspection leaves the output tree untouched.
    - Per-table failures are isolated: the failing table's remaining
      artifacts are skipped, and the next table is processed.
    - Sanity-check findings are logged as warnings only.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from gormgen.config import Settings
from gormgen.errors import GormgenError, SetupError, TableGenerationError
from gormgen.exporters import EmissionSink, FileRecord
from gormgen.introspect import load_schema
from gormgen.models import ArtifactKind, ResolvedTableModel, Table
from gormgen.templates import BASE_FILE_NAME, TemplateRenderer
from gormgen.typemap import TagOptions
from gormgen.utils import Timer
from gormgen.validators import ValidationResult, validate_tables

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gormgen.generator")


class GenerationState(str, Enum):
    IDLE = "idle"
    CONNECTED = "connected"
    TABLES_LOADED = "tables_loaded"
    GENERATING = "generating"
    DONE = "done"
    ABORTED = "aborted"


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TableOutcome:
    """What the fold produced for one table."""

    table_name: str
    emitted: Tuple[str, ...] = ()
    failed_kind: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=False, slots=True)
class GenerationStepMetric:
    """Timing and outcome for a single pipeline step."""

    step_name: str = ""
    success: bool = True
    elapsed_seconds: float = 0.0
    detail: str = ""


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """
    Report produced by ``CodeGenerator.run()``.

    ``success`` is False only when the run aborted; skipped tables are
    listed in ``outcomes`` but do not fail the run.
    """

    success: bool = False
    state: GenerationState = GenerationState.IDLE
    database: str = ""
    fatal_error: Optional[GormgenError] = None

    tables_loaded: int = 0
    base_files: List[str] = field(default_factory=list)
    outcomes: List[TableOutcome] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)

    total_files: int = 0
    total_bytes: int = 0
    total_lines: int = 0
    total_elapsed_seconds: float = 0.0
    step_metrics: List[GenerationStepMetric] = field(default_factory=list)

    @property
    def generated_tables(self) -> List[str]:
        return [o.table_name for o in self.outcomes if o.ok]

    @property
    def skipped_tables(self) -> List[str]:
        return [o.table_name for o in self.outcomes if not o.ok]

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "✅ SUCCESS" if self.success else "❌ FAILED"
        lines.append(f"{'='*60}")
        lines.append("  gormgen - Generation Report")
        lines.append(f"{'='*60}")
        lines.append(f"  Status:           {status}")
        lines.append(f"  Database:         {self.database}")
        lines.append(f"  Tables loaded:    {self.tables_loaded}")
        lines.append(f"  Tables generated: {len(self.generated_tables)}")
        lines.append(f"  Files generated:  {self.total_files}")
        lines.append(f"  Total lines:      {self.total_lines:,}")
        lines.append(f"  Total bytes:      {self.total_bytes:,}")
        lines.append(f"  Total time:       {self.total_elapsed_seconds:.3f}s")
        lines.append(f"{'─'*60}")

        if self.step_metrics:
            lines.append("  Pipeline Steps:")
            for step in self.step_metrics:
                icon: str = "✓" if step.success else "✗"
                lines.append(
                    f"    {icon} {step.step_name:<28s} "
                    f"{step.elapsed_seconds:>7.3f}s  "
                    f"{step.detail}"
                )

        if self.fatal_error is not None:
            lines.append(f"{'─'*60}")
            lines.append(f"  Fatal Error ({type(self.fatal_error).__name__}):")
            lines.append(f"    ✗ {self.fatal_error}")

        if self.validation_warnings:
            lines.append(f"{'─'*60}")
            lines.append(f"  Schema Warnings ({len(self.validation_warnings)}):")
            for warn in self.validation_warnings:
                lines.append(f"    ⚠ {warn}")

        skipped: List[TableOutcome] = [o for o in self.outcomes if not o.ok]
        if skipped:
            lines.append(f"{'─'*60}")
            lines.append(f"  Skipped Tables ({len(skipped)}):")
            for outcome in skipped:
                lines.append(f"    ⊘ {outcome.table_name} ({outcome.failed_kind}): {outcome.error}")

        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# CodeGenerator
# ---------------------------------------------------------------------------


class CodeGenerator:
    """
    Pipeline orchestrator for one generation run.

    Usage::

        generator = CodeGenerator(settings)
        report = generator.run()
        print(report.summary())

    ``engine``, ``renderer`` and ``sink`` may be injected; an engine created
    here is disposed when the run ends.
    """

    def __init__(
        self,
        settings: Settings,
        engine: Optional[Engine] = None,
        renderer: Optional[TemplateRenderer] = None,
        sink: Optional[EmissionSink] = None,
    ) -> None:
        self._settings: Settings = settings
        self._engine: Optional[Engine] = engine
        self._owns_engine: bool = engine is None
        self._renderer: TemplateRenderer = renderer or TemplateRenderer(settings)
        self._sink: EmissionSink = sink or EmissionSink()
        self._state: GenerationState = GenerationState.IDLE

    @property
    def state(self) -> GenerationState:
        return self._state

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def run(self) -> GenerationReport:
        """Execute the whole pipeline and return its report."""
        report: GenerationReport = GenerationReport(database=self._settings.database)
        pipeline_start: float = time.perf_counter()

        try:
            tables: List[Table] = self._connect_and_load(report)
            self._step_prepare_output(report)
            self._step_validate(tables, report)
            self._step_generate(tables, report)
            self._transition(GenerationState.DONE, report)
        except GormgenError as exc:
            report.fatal_error = exc
            self._transition(GenerationState.ABORTED, report)
            logger.error("Generation aborted (%s): %s", type(exc).__name__, exc)
        finally:
            if self._owns_engine and self._engine is not None:
                self._engine.dispose()
                self._engine = None

        report.success = self._state is GenerationState.DONE
        report.total_files = len(self._sink.records)
        report.total_bytes = self._sink.total_bytes
        report.total_lines = self._sink.total_lines
        report.total_elapsed_seconds = time.perf_counter() - pipeline_start
        return report

    # -----------------------------------------------------------------
    # Internal: state
    # -----------------------------------------------------------------

    def _transition(self, state: GenerationState, report: GenerationReport) -> None:
        logger.debug("State: %s -> %s", self._state.value, state.value)
        self._state = state
        report.state = state

    # -----------------------------------------------------------------
    # Pipeline step: connection, output tree, introspection
    # -----------------------------------------------------------------

    def _get_engine(self) -> Engine:
        if self._engine is None:
            try:
                self._engine = create_engine(self._settings.database_url(), pool_pre_ping=True)
            except (SQLAlchemyError, ImportError) as exc:
                raise SetupError(f"cannot create database engine: {exc}") from exc
        return self._engine

    def _connect_and_load(self, report: GenerationReport) -> List[Table]:
        engine: Engine = self._get_engine()

        with Timer("connect") as t_connect:
            try:
                conn: Connection = engine.connect()
            except SQLAlchemyError as exc:
                raise SetupError(f"cannot connect to database: {exc}") from exc

        with conn:
            try:
                conn.execute(text("SELECT 1"))
            except SQLAlchemyError as exc:
                raise SetupError(f"database ping failed: {exc}") from exc

            logger.info("Connected to database '%s'.", self._settings.database)
            report.step_metrics.append(GenerationStepMetric(
                step_name="Connect",
                elapsed_seconds=t_connect.elapsed,
                detail=self._settings.database,
            ))
            self._transition(GenerationState.CONNECTED, report)
            return self._step_introspect(conn, report)

    def _layer_directories(self) -> List[Tuple[ArtifactKind, Path]]:
        settings: Settings = self._settings
        layers: List[Tuple[ArtifactKind, Path]] = [
            (ArtifactKind.RECORD, Path(settings.output_path)),
        ]
        if settings.generate_service:
            layers.append((ArtifactKind.SERVICE, Path(settings.service_output_path)))
        if settings.generate_router:
            layers.append((ArtifactKind.ROUTER, Path(settings.router_output_path)))
        return layers

    def _step_prepare_output(self, report: GenerationReport) -> None:
        """Create layer directories and write the shared base files."""
        base_renderers = {
            ArtifactKind.RECORD: self._renderer.render_base_record,
            ArtifactKind.SERVICE: self._renderer.render_base_service,
            ArtifactKind.ROUTER: self._renderer.render_base_router,
        }
        layers: List[Tuple[ArtifactKind, Path]] = self._layer_directories()

        with Timer("prepare_output") as t:
            try:
                self._sink.prepare(directory for _, directory in layers)
                for kind, directory in layers:
                    record: FileRecord = self._sink.emit(
                        directory,
                        BASE_FILE_NAME,
                        base_renderers[kind](),
                        kind=f"base_{kind.value}",
                    )
                    report.base_files.append(record.path)
            except OSError as exc:
                raise SetupError(f"cannot prepare output tree: {exc}") from exc

        report.step_metrics.append(GenerationStepMetric(
            step_name="Prepare Output",
            elapsed_seconds=t.elapsed,
            detail=f"{len(report.base_files)} base file(s)",
        ))

    def _step_introspect(self, conn: Connection, report: GenerationReport) -> List[Table]:
        with Timer("introspection") as t:
            tables: List[Table] = load_schema(
                conn,
                self._settings.database,
                self._settings.table_names(),
                TagOptions(include_comment=self._settings.generate_comments),
            )

        report.tables_loaded = len(tables)
        report.step_metrics.append(GenerationStepMetric(
            step_name="Introspect Schema",
            elapsed_seconds=t.elapsed,
            detail=f"{len(tables)} table(s)",
        ))
        self._transition(GenerationState.TABLES_LOADED, report)
        return tables

    # -----------------------------------------------------------------
    # Pipeline step: sanity checks
    # -----------------------------------------------------------------

    def _step_validate(self, tables: List[Table], report: GenerationReport) -> None:
        with Timer("validation") as t:
            result: ValidationResult = validate_tables(tables, self._settings.table_names())

        for item in result.warnings:
            logger.warning("  ⚠ %s", item)
            report.validation_warnings.append(str(item))

        report.step_metrics.append(GenerationStepMetric(
            step_name="Sanity Checks",
            elapsed_seconds=t.elapsed,
            detail=(
                f"{result.warning_count} warning(s)"
                if result.has_warnings
                else "all checks passed"
            ),
        ))

    # -----------------------------------------------------------------
    # Pipeline step: per-table fold
    # -----------------------------------------------------------------

    def _step_generate(self, tables: List[Table], report: GenerationReport) -> None:
        self._transition(GenerationState.GENERATING, report)
        layers: List[Tuple[ArtifactKind, Path]] = self._layer_directories()

        with Timer("code_generation") as t:
            report.outcomes = [self._generate_table(table, layers) for table in tables]

        report.step_metrics.append(GenerationStepMetric(
            step_name="Code Generation",
            success=not report.skipped_tables,
            elapsed_seconds=t.elapsed,
            detail=(
                f"{len(report.generated_tables)} generated, "
                f"{len(report.skipped_tables)} skipped"
            ),
        ))
        logger.info(
            "Code generation complete: %d table(s) generated, %d skipped in %.3fs.",
            len(report.generated_tables),
            len(report.skipped_tables),
            t.elapsed,
        )

    def _generate_table(
        self,
        table: Table,
        layers: List[Tuple[ArtifactKind, Path]],
    ) -> TableOutcome:
        """Render and emit every enabled artifact of one table, stopping at the first failure."""
        emitted: List[str] = []
        kind: ArtifactKind = ArtifactKind.RECORD
        try:
            model: ResolvedTableModel = self._renderer.build_model(table)
            for kind, directory in layers:
                content: str = self._renderer.render(kind, model)
                try:
                    record: FileRecord = self._sink.emit(
                        directory,
                        self._renderer.file_name(kind, model),
                        content,
                        table_name=table.name,
                        kind=kind.value,
                    )
                except OSError as exc:
                    raise TableGenerationError(
                        table.name, f"writing {kind.value} failed: {exc}"
                    ) from exc
                emitted.append(record.path)
        except TableGenerationError as exc:
            logger.error(
                "Skipping remaining artifacts of table '%s' after %s failed: %s",
                table.name,
                kind.value,
                exc,
            )
            return TableOutcome(
                table_name=table.name,
                emitted=tuple(emitted),
                failed_kind=kind.value,
                error=str(exc),
            )

        logger.info("Generated table '%s': %d file(s).", table.name, len(emitted))
        return TableOutcome(table_name=table.name, emitted=tuple(emitted))


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "CodeGenerator",
    "GenerationReport",
    "GenerationState",
    "GenerationStepMetric",
    "TableOutcome",
]

logger.debug("gormgen.generator loaded.")
