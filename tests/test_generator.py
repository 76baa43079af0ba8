"""
tests/test_generator.py
End-to-end tests for gormgen.generator.CodeGenerator.

Each test runs the full pipeline against the in-memory metadata store from
conftest.py and inspects the files written under ``tmp_path``.

Tests cover:
- Record-only and all-layer runs
- Table filtering and unknown filter names
- Per-table failure isolation
- Fatal setup and introspection failures
- Report contents and summary text
"""

from __future__ import annotations

import pathlib
from typing import List

import pytest

from gormgen.config import Settings
from gormgen.errors import IntrospectionError, SetupError, TemplateRenderError
from gormgen.generator import CodeGenerator, GenerationReport, GenerationState
from gormgen.models import ResolvedTableModel
from gormgen.templates import GENERATED_HEADER, TemplateRenderer

from tests.conftest import MetadataStore


def _names(directory: pathlib.Path) -> List[str]:
    return sorted(p.name for p in directory.iterdir())


@pytest.fixture()
def models_dir(settings: Settings) -> pathlib.Path:
    return pathlib.Path(settings.output_path)


@pytest.fixture()
def services_dir(settings: Settings) -> pathlib.Path:
    return pathlib.Path(settings.service_output_path)


@pytest.fixture()
def router_dir(settings: Settings) -> pathlib.Path:
    return pathlib.Path(settings.router_output_path)


# ===========================================================================
# Successful runs
# ===========================================================================


class TestRecordOnlyRun:
    """Only the record layer is enabled."""

    def test_writes_one_file_per_table(
        self, settings: Settings, shop_store: MetadataStore, models_dir: pathlib.Path
    ) -> None:
        settings = settings.model_copy(
            update={"generate_service": False, "generate_router": False}
        )
        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert report.success
        assert report.state is GenerationState.DONE
        assert report.fatal_error is None
        assert report.tables_loaded == 3
        assert _names(models_dir) == ["base.go", "metrics.go", "orders.go", "users.go"]
        assert not (models_dir.parent / "services").exists()
        assert not (models_dir.parent / "router").exists()
        assert report.total_files == 4

    def test_record_content(
        self, settings: Settings, shop_store: MetadataStore, models_dir: pathlib.Path
    ) -> None:
        CodeGenerator(settings, engine=shop_store.engine).run()
        content = (models_dir / "users.go").read_text(encoding="utf-8")
        assert content.startswith(GENERATED_HEADER)
        assert "// Users users" in content
        assert "\tBaseModel\n" in content
        assert '\tEmail string `gorm:"column:email;size:100" json:"email"`' in content
        assert 'return "users"' in content

    def test_comments_switched_off(
        self, settings: Settings, shop_store: MetadataStore, models_dir: pathlib.Path
    ) -> None:
        settings = settings.model_copy(update={"generate_comments": False})
        CodeGenerator(settings, engine=shop_store.engine).run()
        content = (models_dir / "users.go").read_text(encoding="utf-8")
        assert "login name" not in content
        assert (
            '\tUsername string `gorm:"column:username;not null;size:50" json:"username"`'
        ) in content


class TestAllLayersRun:
    """Record, service and router layers are all enabled."""

    def test_every_layer_written(
        self,
        settings: Settings,
        shop_store: MetadataStore,
        models_dir: pathlib.Path,
        services_dir: pathlib.Path,
        router_dir: pathlib.Path,
    ) -> None:
        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert report.success
        assert _names(services_dir) == [
            "base.go", "metrics_service.go", "orders_service.go", "users_service.go",
        ]
        assert _names(router_dir) == [
            "base.go", "metrics_router.go", "orders_router.go", "users_router.go",
        ]
        assert len(report.base_files) == 3
        assert report.total_files == 12
        assert report.generated_tables == ["metrics", "orders", "users"]
        assert report.skipped_tables == []

    def test_layers_agree_on_names(
        self,
        settings: Settings,
        shop_store: MetadataStore,
        services_dir: pathlib.Path,
        router_dir: pathlib.Path,
    ) -> None:
        CodeGenerator(settings, engine=shop_store.engine).run()
        service = (services_dir / "orders_service.go").read_text(encoding="utf-8")
        router = (router_dir / "orders_router.go").read_text(encoding="utf-8")

        assert "func (s *OrdersService) GetByOrderNo(orderNo string)" in service
        assert "h.ordersService.GetByOrderNo(orders.OrderNo)" in router
        assert 'Error(c, 409, "order number, unique already exists")' in router
        assert "func RegisterOrdersRoutes(r *gin.RouterGroup) {" in router

    def test_timestamp_columns_left_to_base_model(
        self,
        settings: Settings,
        shop_store: MetadataStore,
        models_dir: pathlib.Path,
        router_dir: pathlib.Path,
    ) -> None:
        shop_store.add_table(
            "posts",
            [
                ("id", "int(11)", False, "PRI", "auto_increment", ""),
                ("title", "varchar(100)", False, "", "", ""),
                ("updated_at", "datetime", True, "", "", ""),
                ("deleted_at", "datetime", True, "", "", ""),
            ],
        )
        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert report.success
        assert "posts" in report.generated_tables
        record = (models_dir / "posts.go").read_text(encoding="utf-8")
        router = (router_dir / "posts_router.go").read_text(encoding="utf-8")
        assert "\tBaseModel\n" in record
        assert "UpdatedAt" not in record
        assert "UpdatedAt" not in router
        assert "DeletedAt" not in router
        assert "posts.Title = updateData.Title" in router

    def test_totals_match_files_on_disk(
        self, settings: Settings, shop_store: MetadataStore, models_dir: pathlib.Path
    ) -> None:
        report = CodeGenerator(settings, engine=shop_store.engine).run()
        on_disk = sum(
            p.stat().st_size
            for p in models_dir.parent.rglob("*.go")
        )
        assert report.total_bytes == on_disk
        assert report.total_lines > 0

    def test_rerun_overwrites(
        self, settings: Settings, shop_store: MetadataStore, models_dir: pathlib.Path
    ) -> None:
        CodeGenerator(settings, engine=shop_store.engine).run()
        first = (models_dir / "orders.go").read_text(encoding="utf-8")
        report = CodeGenerator(settings, engine=shop_store.engine).run()
        assert report.success
        assert (models_dir / "orders.go").read_text(encoding="utf-8") == first

    def test_injected_engine_not_disposed(
        self, settings: Settings, shop_store: MetadataStore
    ) -> None:
        CodeGenerator(settings, engine=shop_store.engine).run()
        with shop_store.engine.connect() as conn:
            rows = conn.exec_driver_sql(
                "SELECT COUNT(*) FROM information_schema.TABLES"
            ).scalar()
        assert rows == 4


class TestTableFilter:
    """Only the requested tables are generated."""

    def test_filter(
        self, settings: Settings, shop_store: MetadataStore, models_dir: pathlib.Path
    ) -> None:
        settings = settings.model_copy(update={"table_filter": "users,orders"})
        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert report.success
        assert report.tables_loaded == 2
        assert _names(models_dir) == ["base.go", "orders.go", "users.go"]
        assert report.total_files == 9
        assert report.validation_warnings == []

    def test_unknown_name_warns(
        self, settings: Settings, shop_store: MetadataStore
    ) -> None:
        settings = settings.model_copy(update={"table_filter": "users,ghosts"})
        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert report.success
        assert report.tables_loaded == 1
        assert len(report.validation_warnings) == 1
        assert "TABLE_NOT_FOUND" in report.validation_warnings[0]

    def test_empty_schema(self, settings: Settings, metadata_store: MetadataStore) -> None:
        report = CodeGenerator(settings, engine=metadata_store.engine).run()
        assert report.success
        assert report.tables_loaded == 0
        assert report.outcomes == []
        assert report.total_files == 3


# ===========================================================================
# Failure isolation
# ===========================================================================


class TestPerTableFailure:
    """A failing table is skipped; the run continues and succeeds."""

    def test_router_failure_keeps_earlier_artifacts(
        self,
        settings: Settings,
        shop_store: MetadataStore,
        monkeypatch: pytest.MonkeyPatch,
        models_dir: pathlib.Path,
        services_dir: pathlib.Path,
        router_dir: pathlib.Path,
    ) -> None:
        original = TemplateRenderer.render_router

        def _failing_router(self: TemplateRenderer, model: ResolvedTableModel) -> str:
            if model.table_name == "orders":
                raise TemplateRenderError(model.table_name, "boom")
            return original(self, model)

        monkeypatch.setattr(TemplateRenderer, "render_router", _failing_router)
        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert report.success
        assert report.skipped_tables == ["orders"]
        assert report.generated_tables == ["metrics", "users"]
        assert (models_dir / "orders.go").exists()
        assert (services_dir / "orders_service.go").exists()
        assert not (router_dir / "orders_router.go").exists()
        assert (router_dir / "users_router.go").exists()

        outcome = next(o for o in report.outcomes if o.table_name == "orders")
        assert outcome.failed_kind == "router"
        assert len(outcome.emitted) == 2
        assert "boom" in (outcome.error or "")
        assert "Skipped Tables (1)" in report.summary()

    def test_invalid_identifier_skips_table(
        self, settings: Settings, shop_store: MetadataStore, models_dir: pathlib.Path
    ) -> None:
        shop_store.add_table(
            "audit-log",
            [("id", "int(11)", False, "PRI", "auto_increment", "")],
        )
        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert report.success
        assert report.skipped_tables == ["audit-log"]
        assert not (models_dir / "audit-log.go").exists()
        assert any("INVALID_TABLE_NAME" in w for w in report.validation_warnings)

    def test_write_failure_skips_table(
        self, settings: Settings, shop_store: MetadataStore, models_dir: pathlib.Path
    ) -> None:
        (models_dir / "users.go").mkdir(parents=True)
        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert report.success
        assert report.skipped_tables == ["users"]
        outcome = next(o for o in report.outcomes if o.table_name == "users")
        assert outcome.failed_kind == "record"
        assert outcome.emitted == ()


# ===========================================================================
# Fatal failures
# ===========================================================================


class TestFatalFailures:
    """Setup and introspection failures abort the run without raising."""

    def test_output_tree_blocked(
        self, settings: Settings, shop_store: MetadataStore, tmp_path: pathlib.Path
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        settings = Settings(
            database="shop",
            output_path=str(blocker / "models"),
        )
        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert not report.success
        assert report.state is GenerationState.ABORTED
        assert isinstance(report.fatal_error, SetupError)
        assert report.tables_loaded == 3
        assert report.outcomes == []
        assert report.total_files == 0

    def test_introspection_failure(
        self, settings: Settings, shop_store: MetadataStore, models_dir: pathlib.Path
    ) -> None:
        with shop_store.engine.begin() as conn:
            conn.exec_driver_sql("DROP TABLE information_schema.COLUMNS")

        report = CodeGenerator(settings, engine=shop_store.engine).run()

        assert not report.success
        assert report.state is GenerationState.ABORTED
        assert isinstance(report.fatal_error, IntrospectionError)
        assert report.outcomes == []
        assert not models_dir.exists()
        assert report.base_files == []
        assert "Fatal Error (IntrospectionError)" in report.summary()

    def test_unreachable_server(self, tmp_path: pathlib.Path) -> None:
        settings = Settings(
            database="shop",
            host="127.0.0.1",
            port=1,
            output_path=str(tmp_path / "models"),
        )
        report = CodeGenerator(settings).run()

        assert not report.success
        assert isinstance(report.fatal_error, SetupError)
        assert not (tmp_path / "models").exists()


# ===========================================================================
# Report
# ===========================================================================


class TestReport:
    """Tests for GenerationReport bookkeeping."""

    def test_step_metrics(self, settings: Settings, shop_store: MetadataStore) -> None:
        report = CodeGenerator(settings, engine=shop_store.engine).run()
        assert [s.step_name for s in report.step_metrics] == [
            "Connect",
            "Introspect Schema",
            "Prepare Output",
            "Sanity Checks",
            "Code Generation",
        ]

    def test_summary(self, settings: Settings, shop_store: MetadataStore) -> None:
        report: GenerationReport = CodeGenerator(settings, engine=shop_store.engine).run()
        text = report.summary()
        assert "SUCCESS" in text
        assert "Database:         shop" in text
        assert "Files generated:  12" in text
