# File: gormgen/templates.py
"""
gormgen - Go Template Engine
============================
Turns a ``ResolvedTableModel`` into Go source text for:
    1. GORM record structs               (``models`` package)
    2. persistence services              (``services`` package)
    3. gin handlers + route registration (``router`` package)
plus the three shared ``base.go`` files emitted once per run.

**Consistency contract:**
    - ``build_model`` is the only place names are derived.  The service
      template uses the record's ``type_name`` verbatim and the router
      template calls exactly the service methods the service template
      declares.
    - Field subsets are drawn from the columns the record declares, so the
      service and router never reference a field the struct lacks.
    - Render methods are pure: same model + settings ⇒ same text.

String assembly follows the ``List[str]`` + ``"\\n".join()`` pattern.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Callable, Dict, FrozenSet, List, Sequence

from gormgen.classify import search_fields, to_field_ref, unique_fields, updateable_fields
from gormgen.config import Settings
from gormgen.errors import TemplateRenderError
from gormgen.models import ArtifactKind, Column, FieldRef, ResolvedTableModel, Table
from gormgen.naming import to_delimited, to_type_name, to_variable_name
from gormgen.typemap import GO_TIME
from gormgen.utils import is_go_identifier

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gormgen.templates")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_T: str = "\t"
_TT: str = "\t\t"
_TTT: str = "\t\t\t"

GENERATED_HEADER: str = "// Code generated by gormgen. DO NOT EDIT."

SERVICE_PACKAGE: str = "services"
ROUTER_PACKAGE: str = "router"
STORAGE_ALIAS: str = "mysqlx"
BASE_FILE_NAME: str = "base.go"

# Columns supplied by the embedded BaseModel.
BASE_RECORD_COLUMNS: FrozenSet[str] = frozenset(
    {"id", "created_at", "updated_at", "deleted_at"}
)

_FILE_SUFFIXES: Dict[ArtifactKind, str] = {
    ArtifactKind.RECORD: ".go",
    ArtifactKind.SERVICE: "_service.go",
    ArtifactKind.ROUTER: "_router.go",
}

GO_KEYWORDS: FrozenSet[str] = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var",
})


# Receivers, locals and package names the templates declare themselves.
GENERATED_LOCALS: FrozenSet[str] = frozenset({
    "c", "h", "r", "s", "id", "err", "updateData", "handler", "page",
    "pageSize", "total", "offset", "query", "keyword", "like",
    "gin", "http", "strconv", "errors", "gorm", "time",
    SERVICE_PACKAGE, STORAGE_ALIAS,
})


def _local_name(name: str, reserved: FrozenSet[str], suffix: str) -> str:
    """*name*, or *name* + *suffix* when it would shadow a generated name."""
    return f"{name}{suffix}" if name in reserved else name


def go_string(value: str) -> str:
    """Quote *value* as a Go interpreted string literal."""
    return json.dumps(value, ensure_ascii=False)


def _one_line(text: str) -> str:
    return " ".join(text.split())


def _is_set(expr: str, field: FieldRef) -> str:
    """Go condition that is true when *expr* differs from its zero value."""
    if field.go_type == GO_TIME:
        return f"!{expr}.IsZero()"
    return f"{expr} != {field.zero_value}"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """
    Stateless Go code renderer.

    Holds only the read-only ``Settings``; every ``render_*`` method returns
    a complete file body.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings: Settings = settings
        self._model_alias: str = settings.package_name
        self._reserved: FrozenSet[str] = GO_KEYWORDS | GENERATED_LOCALS | {self._model_alias}
        self._renderers: Dict[ArtifactKind, Callable[[ResolvedTableModel], str]] = {
            ArtifactKind.RECORD: self.render_record,
            ArtifactKind.SERVICE: self.render_service,
            ArtifactKind.ROUTER: self.render_router,
        }

    # ===================================================================
    # Model building
    # ===================================================================

    def build_model(self, table: Table) -> ResolvedTableModel:
        """Derive every name and field subset the templates need for *table*."""
        settings: Settings = self._settings
        type_name: str = to_type_name(table.name)
        base_var: str = to_variable_name(table.name)
        var_name: str = _local_name(base_var, self._reserved, "Record")
        embed_base: bool = settings.generate_base_model

        # Columns the record declares itself; BaseModel supplies the rest.
        own_columns: List[Column] = [
            column
            for column in table.columns
            if not (embed_base and column.name.lower() in BASE_RECORD_COLUMNS)
        ]

        record_fields: List[FieldRef] = []
        for column in own_columns:
            tag: str = column.annotation.render(
                gorm=settings.generate_gorm_tags,
                json=settings.generate_json_tags,
            )
            record_fields.append(dataclasses.replace(to_field_ref(column), tag=tag))

        return ResolvedTableModel(
            table_name=table.name,
            comment=_one_line(table.comment),
            type_name=type_name,
            var_name=var_name,
            file_stem=to_delimited(table.name),
            route_path=to_delimited(table.name),
            service_name=f"{type_name}Service",
            service_var_name=f"{base_var}Service",
            handler_name=f"{type_name}Handler",
            route_group=f"{base_var}Group",
            record_fields=tuple(record_fields),
            unique_fields=unique_fields(own_columns),
            search_fields=search_fields(own_columns),
            updateable_fields=updateable_fields(own_columns),
            embed_base=embed_base,
            needs_time_import=any(GO_TIME in f.go_type for f in record_fields),
        )

    # ===================================================================
    # Dispatch
    # ===================================================================

    def render(self, kind: ArtifactKind, model: ResolvedTableModel) -> str:
        """Render one artifact of *kind* for *model*."""
        return self._renderers[ArtifactKind(kind)](model)

    @staticmethod
    def file_name(kind: ArtifactKind, model: ResolvedTableModel) -> str:
        """``users.go``, ``users_service.go`` or ``users_router.go``."""
        return f"{model.file_stem}{_FILE_SUFFIXES[ArtifactKind(kind)]}"

    # -------------------------------------------------------------------
    # Identifier guard
    # -------------------------------------------------------------------

    @staticmethod
    def _require_identifiers(model: ResolvedTableModel, names: Sequence[str]) -> None:
        for name in names:
            if not is_go_identifier(name) or name in GO_KEYWORDS:
                raise TemplateRenderError(
                    model.table_name,
                    f"derived name {name!r} is not a usable Go identifier",
                    identifier=name,
                )

    # ===================================================================
    # 1. Record layer
    # ===================================================================

    def render_base_record(self) -> str:
        """The shared ``BaseModel`` every record embeds."""
        soft_delete: bool = self._settings.use_soft_delete
        lines: List[str] = [
            GENERATED_HEADER,
            "",
            f"package {self._settings.package_name}",
            "",
            "import (",
            f'{_T}"time"',
        ]
        if soft_delete:
            lines.append("")
            lines.append(f'{_T}"gorm.io/gorm"')
        lines.extend([
            ")",
            "",
            "// BaseModel holds the columns shared by every model.",
            "type BaseModel struct {",
            f'{_T}ID        uint           `gorm:"primarykey" json:"id"`',
            f'{_T}CreatedAt time.Time      `json:"created_at"`',
            f'{_T}UpdatedAt time.Time      `json:"updated_at"`',
        ])
        if soft_delete:
            lines.append(f'{_T}DeletedAt gorm.DeletedAt `gorm:"index" json:"-"`')
        lines.append("}")
        lines.append("")
        return "\n".join(lines)

    def render_record(self, model: ResolvedTableModel) -> str:
        """GORM struct for one table."""
        self._require_identifiers(
            model, [model.type_name] + [f.go_name for f in model.record_fields]
        )
        lines: List[str] = [
            GENERATED_HEADER,
            "",
            f"package {self._settings.package_name}",
            "",
        ]
        if model.needs_time_import:
            lines.append('import "time"')
            lines.append("")

        doc: str = f"// {model.type_name}"
        if model.comment:
            doc += f" {model.comment}"
        lines.append(doc)
        lines.append(f"type {model.type_name} struct {{")
        if model.embed_base:
            lines.append(f"{_T}BaseModel")

        for field in model.record_fields:
            line: str = f"{_T}{field.go_name} {field.go_type}"
            if field.tag:
                line += f" `{field.tag}`"
            if field.comment and self._settings.generate_comments:
                line += f" // {_one_line(field.comment)}"
            lines.append(line)
        lines.append("}")
        lines.append("")
        lines.append("// TableName returns the table name used by GORM.")
        lines.append(f"func ({model.type_name}) TableName() string {{")
        lines.append(f"{_T}return {go_string(model.table_name)}")
        lines.append("}")
        lines.append("")

        content: str = "\n".join(lines)
        logger.debug(
            "Rendered record for '%s': %d lines.",
            model.table_name,
            content.count("\n") + 1,
        )
        return content

    # ===================================================================
    # 2. Persistence layer
    # ===================================================================

    def render_base_service(self) -> str:
        """Shared service interface and error helpers."""
        lines: List[str] = [
            GENERATED_HEADER,
            "",
            f"package {SERVICE_PACKAGE}",
            "",
            "import (",
            f'{_T}"errors"',
            "",
            f'{_T}"gorm.io/gorm"',
            ")",
            "",
            "// BaseService is the contract every generated service satisfies.",
            "type BaseService interface {",
            f"{_T}Create(model interface{{}}) error",
            f"{_T}GetByID(id uint) (interface{{}}, error)",
            f"{_T}Update(model interface{{}}) error",
            f"{_T}Delete(id uint) error",
            f"{_T}List(page, pageSize int) ([]interface{{}}, int64, error)",
            "}",
            "",
            "// ServiceError carries an application error code.",
            "type ServiceError struct {",
            f"{_T}Code    int",
            f"{_T}Message string",
            "}",
            "",
            "func (e ServiceError) Error() string {",
            f"{_T}return e.Message",
            "}",
            "",
            "// NewServiceError creates a ServiceError.",
            "func NewServiceError(code int, message string) error {",
            f"{_T}return ServiceError{{Code: code, Message: message}}",
            "}",
            "",
            "// IsNotFound reports whether err means the record does not exist.",
            "func IsNotFound(err error) bool {",
            f"{_T}return errors.Is(err, gorm.ErrRecordNotFound)",
            "}",
            "",
        ]
        return "\n".join(lines)

    def render_service(self, model: ResolvedTableModel) -> str:
        """Service with CRUD, list, unique-field accessors and optional search."""
        v: str = model.var_name
        params: Dict[str, str] = {
            f.go_name: _local_name(f.var_name, self._reserved | {v}, "Value")
            for f in model.unique_fields
        }
        self._require_identifiers(
            model,
            [model.type_name, model.service_name, v]
            + [f.go_name for f in model.unique_fields]
            + list(params.values()),
        )
        m: str = f"{self._model_alias}.{model.type_name}"
        svc: str = model.service_name
        subject: str = model.comment or model.type_name

        lines: List[str] = [
            GENERATED_HEADER,
            "",
            f"package {SERVICE_PACKAGE}",
            "",
            "import (",
            f"{_T}{self._model_alias} {go_string(self._settings.model_import_path)}",
            f"{_T}{STORAGE_ALIAS} {go_string(self._settings.storage_import_path.rstrip('/') + '/mysql')}",
            ")",
            "",
            f"// {svc} provides persistence for {subject}.",
            f"type {svc} struct{{}}",
            "",
            f"// New{svc} creates a {svc}.",
            f"func New{svc}() *{svc} {{",
            f"{_T}return &{svc}{{}}",
            "}",
            "",
            f"// Create inserts a new {subject}.",
            f"func (s *{svc}) Create({v} *{m}) error {{",
            f"{_T}return {STORAGE_ALIAS}.DB.Create({v}).Error",
            "}",
            "",
            f"// GetByID loads a {subject} by primary key.",
            f"func (s *{svc}) GetByID(id uint) (*{m}, error) {{",
            f"{_T}var {v} {m}",
            f"{_T}if err := {STORAGE_ALIAS}.DB.First(&{v}, id).Error; err != nil {{",
            f"{_TT}return nil, err",
            f"{_T}}}",
            f"{_T}return &{v}, nil",
            "}",
        ]

        for field in model.unique_fields:
            param: str = params[field.go_name]
            lines.extend([
                "",
                f"// GetBy{field.go_name} loads a {subject} by {field.db_name}.",
                f"func (s *{svc}) GetBy{field.go_name}({param} {field.go_type}) (*{m}, error) {{",
                f"{_T}var {v} {m}",
                f"{_T}err := {STORAGE_ALIAS}.DB.Where({go_string(field.db_name + ' = ?')}, {param}).First(&{v}).Error",
                f"{_T}if err != nil {{",
                f"{_TT}return nil, err",
                f"{_T}}}",
                f"{_T}return &{v}, nil",
                "}",
            ])

        lines.extend([
            "",
            f"// Update saves every field of {v}.",
            f"func (s *{svc}) Update({v} *{m}) error {{",
            f"{_T}return {STORAGE_ALIAS}.DB.Save({v}).Error",
            "}",
            "",
            f"// Delete removes a {subject} by primary key.",
            f"func (s *{svc}) Delete(id uint) error {{",
            f"{_T}return {STORAGE_ALIAS}.DB.Delete(&{m}{{}}, id).Error",
            "}",
            "",
            f"// List returns one page of {subject} and the total count.",
            f"func (s *{svc}) List(page, pageSize int) ([]{m}, int64, error) {{",
        ])
        lines.extend(self._paged_query_body(f"{STORAGE_ALIAS}.DB.Model(&{m}{{}})", m, v))
        lines.append("}")

        if model.has_search_fields:
            # One Where per column; GORM ANDs chained conditions.
            filters: List[str] = [
                f"{_T}query = query.Where({go_string(f.db_name + ' LIKE ?')}, like)"
                for f in model.search_fields
            ]
            lines.extend([
                "",
                f"// Search matches keyword against every text column of {subject}.",
                f"func (s *{svc}) Search(keyword string, page, pageSize int) ([]{m}, int64, error) {{",
                f'{_T}like := "%" + keyword + "%"',
            ])
            lines.extend(
                self._paged_query_body(
                    f"{STORAGE_ALIAS}.DB.Model(&{m}{{}})", m, v, filters
                )
            )
            lines.append("}")

        lines.append("")
        content: str = "\n".join(lines)
        logger.debug(
            "Rendered service for '%s': %d unique, %d search fields.",
            model.table_name,
            len(model.unique_fields),
            len(model.search_fields),
        )
        return content

    @staticmethod
    def _paged_query_body(
        query_expr: str,
        model_type: str,
        var_name: str,
        filters: Sequence[str] = (),
    ) -> List[str]:
        return [
            f"{_T}var {var_name}List []{model_type}",
            f"{_T}var total int64",
            "",
            f"{_T}query := {query_expr}",
            *filters,
            f"{_T}if err := query.Count(&total).Error; err != nil {{",
            f"{_TT}return nil, 0, err",
            f"{_T}}}",
            "",
            f"{_T}offset := (page - 1) * pageSize",
            f"{_T}if err := query.Offset(offset).Limit(pageSize).Find(&{var_name}List).Error; err != nil {{",
            f"{_TT}return nil, 0, err",
            f"{_T}}}",
            f"{_T}return {var_name}List, total, nil",
        ]

    # ===================================================================
    # 3. Routing layer
    # ===================================================================

    def render_base_router(self) -> str:
        """Shared response envelope and request-parameter helpers."""
        lines: List[str] = [
            GENERATED_HEADER,
            "",
            f"package {ROUTER_PACKAGE}",
            "",
            "import (",
            f'{_T}"net/http"',
            f'{_T}"strconv"',
            "",
            f'{_T}"github.com/gin-gonic/gin"',
            ")",
            "",
            "// Response is the envelope of every JSON reply.",
            "type Response struct {",
            f'{_T}Code    int         `json:"code"`',
            f'{_T}Message string      `json:"message"`',
            f'{_T}Data    interface{{}} `json:"data,omitempty"`',
            "}",
            "",
            "// Success writes a 200 envelope carrying data.",
            "func Success(c *gin.Context, data interface{}) {",
            f'{_T}c.JSON(http.StatusOK, Response{{Code: 200, Message: "success", Data: data}})',
            "}",
            "",
            "// Error writes an envelope carrying an application error code.",
            "func Error(c *gin.Context, code int, message string) {",
            f"{_T}c.JSON(http.StatusOK, Response{{Code: code, Message: message}})",
            "}",
            "",
            "// GetPageParams reads page and page_size, clamping bad values.",
            "func GetPageParams(c *gin.Context) (int, int) {",
            f'{_T}page, err := strconv.Atoi(c.DefaultQuery("page", "1"))',
            f"{_T}if err != nil || page < 1 {{",
            f"{_TT}page = 1",
            f"{_T}}}",
            f'{_T}pageSize, err := strconv.Atoi(c.DefaultQuery("page_size", "10"))',
            f"{_T}if err != nil || pageSize < 1 || pageSize > 100 {{",
            f"{_TT}pageSize = 10",
            f"{_T}}}",
            f"{_T}return page, pageSize",
            "}",
            "",
            "// GetIDParam parses the :id path parameter.",
            "func GetIDParam(c *gin.Context) (uint, error) {",
            f'{_T}id, err := strconv.ParseUint(c.Param("id"), 10, 32)',
            f"{_T}if err != nil {{",
            f"{_TT}return 0, err",
            f"{_T}}}",
            f"{_T}return uint(id), nil",
            "}",
            "",
        ]
        return "\n".join(lines)

    def render_router(self, model: ResolvedTableModel) -> str:
        """gin handlers and ``Register<Type>Routes`` for one table."""
        self._require_identifiers(
            model,
            [
                model.type_name,
                model.handler_name,
                model.service_name,
                model.service_var_name,
                model.var_name,
                model.route_group,
            ],
        )
        t: str = model.type_name
        m: str = f"{self._model_alias}.{t}"
        h: str = model.handler_name
        v: str = model.var_name
        sv: str = f"h.{model.service_var_name}"
        subject: str = model.comment or t

        lines: List[str] = [
            GENERATED_HEADER,
            "",
            f"package {ROUTER_PACKAGE}",
            "",
            "import (",
            f'{_T}"github.com/gin-gonic/gin"',
            f"{_T}{self._model_alias} {go_string(self._settings.model_import_path)}",
            f"{_T}{SERVICE_PACKAGE} {go_string(self._settings.service_import_path)}",
            ")",
            "",
            f"// {h} serves the HTTP endpoints for {subject}.",
            f"type {h} struct {{",
            f"{_T}{model.service_var_name} *{SERVICE_PACKAGE}.{model.service_name}",
            "}",
            "",
            f"// New{h} creates a {h}.",
            f"func New{h}() *{h} {{",
            f"{_T}return &{h}{{",
            f"{_TT}{model.service_var_name}: {SERVICE_PACKAGE}.New{model.service_name}(),",
            f"{_T}}}",
            "}",
            "",
            f"// Create{t} handles POST /{model.route_path}.",
            f"func (h *{h}) Create{t}(c *gin.Context) {{",
            f"{_T}var {v} {m}",
            f"{_T}if err := c.ShouldBindJSON(&{v}); err != nil {{",
            f'{_TT}Error(c, 400, "invalid request body: "+err.Error())',
            f"{_TT}return",
            f"{_T}}}",
        ]

        for field in model.unique_fields:
            label: str = _one_line(field.comment) or field.db_name
            lines.extend([
                f"{_T}if {_is_set(f'{v}.{field.go_name}', field)} {{",
                f"{_TT}if _, err := {sv}.GetBy{field.go_name}({v}.{field.go_name}); err == nil {{",
                f"{_TTT}Error(c, 409, {go_string(label + ' already exists')})",
                f"{_TTT}return",
                f"{_TT}}}",
                f"{_T}}}",
            ])

        lines.extend([
            f"{_T}if err := {sv}.Create(&{v}); err != nil {{",
            f'{_TT}Error(c, 500, "create failed: "+err.Error())',
            f"{_TT}return",
            f"{_T}}}",
            f"{_T}Success(c, {v})",
            "}",
            "",
            f"// Get{t} handles GET /{model.route_path}/:id.",
            f"func (h *{h}) Get{t}(c *gin.Context) {{",
        ])
        lines.extend(self._id_param_block())
        lines.extend([
            f"{_T}{v}, err := {sv}.GetByID(id)",
            f"{_T}if err != nil {{",
            f'{_TT}Error(c, 404, "not found")',
            f"{_TT}return",
            f"{_T}}}",
            f"{_T}Success(c, {v})",
            "}",
            "",
            f"// Update{t} handles PUT /{model.route_path}/:id.",
            f"func (h *{h}) Update{t}(c *gin.Context) {{",
        ])
        lines.extend(self._id_param_block())
        lines.extend([
            f"{_T}var updateData {m}",
            f"{_T}if err := c.ShouldBindJSON(&updateData); err != nil {{",
            f'{_TT}Error(c, 400, "invalid request body: "+err.Error())',
            f"{_TT}return",
            f"{_T}}}",
            f"{_T}{v}, err := {sv}.GetByID(id)",
            f"{_T}if err != nil {{",
            f'{_TT}Error(c, 404, "not found")',
            f"{_TT}return",
            f"{_T}}}",
        ])
        for field in model.updateable_fields:
            lines.extend([
                f"{_T}if {_is_set('updateData.' + field.go_name, field)} {{",
                f"{_TT}{v}.{field.go_name} = updateData.{field.go_name}",
                f"{_T}}}",
            ])
        lines.extend([
            f"{_T}if err := {sv}.Update({v}); err != nil {{",
            f'{_TT}Error(c, 500, "update failed: "+err.Error())',
            f"{_TT}return",
            f"{_T}}}",
            f"{_T}Success(c, {v})",
            "}",
            "",
            f"// Delete{t} handles DELETE /{model.route_path}/:id.",
            f"func (h *{h}) Delete{t}(c *gin.Context) {{",
        ])
        lines.extend(self._id_param_block())
        lines.extend([
            f"{_T}if err := {sv}.Delete(id); err != nil {{",
            f'{_TT}Error(c, 500, "delete failed: "+err.Error())',
            f"{_TT}return",
            f"{_T}}}",
            f'{_T}Success(c, gin.H{{"message": "deleted"}})',
            "}",
            "",
            f"// List{t}s handles GET /{model.route_path}.",
            f"func (h *{h}) List{t}s(c *gin.Context) {{",
            f"{_T}page, pageSize := GetPageParams(c)",
            f"{_T}{v}List, total, err := {sv}.List(page, pageSize)",
            f"{_T}if err != nil {{",
            f'{_TT}Error(c, 500, "list failed: "+err.Error())',
            f"{_TT}return",
            f"{_T}}}",
        ])
        lines.extend(self._page_reply(v))
        lines.append("}")

        if model.has_search_fields:
            lines.extend([
                "",
                f"// Search{t}s handles GET /{model.route_path}/search.",
                f"func (h *{h}) Search{t}s(c *gin.Context) {{",
                f'{_T}keyword := c.Query("keyword")',
                f'{_T}if keyword == "" {{',
                f'{_TT}Error(c, 400, "keyword is required")',
                f"{_TT}return",
                f"{_T}}}",
                f"{_T}page, pageSize := GetPageParams(c)",
                f"{_T}{v}List, total, err := {sv}.Search(keyword, page, pageSize)",
                f"{_T}if err != nil {{",
                f'{_TT}Error(c, 500, "search failed: "+err.Error())',
                f"{_TT}return",
                f"{_T}}}",
            ])
            lines.extend(self._page_reply(v))
            lines.append("}")

        g: str = model.route_group
        lines.extend([
            "",
            f"// Register{t}Routes mounts the {t} endpoints on r.",
            f"func Register{t}Routes(r *gin.RouterGroup) {{",
            f"{_T}handler := New{h}()",
            "",
            f"{_T}{g} := r.Group({go_string('/' + model.route_path)})",
            f"{_T}{{",
            f'{_TT}{g}.POST("", handler.Create{t})',
            f'{_TT}{g}.GET("", handler.List{t}s)',
            f'{_TT}{g}.GET("/:id", handler.Get{t})',
            f'{_TT}{g}.PUT("/:id", handler.Update{t})',
            f'{_TT}{g}.DELETE("/:id", handler.Delete{t})',
        ])
        if model.has_search_fields:
            lines.append(f'{_TT}{g}.GET("/search", handler.Search{t}s)')
        lines.extend([
            f"{_T}}}",
            "}",
            "",
        ])

        content: str = "\n".join(lines)
        logger.debug(
            "Rendered router for '%s': %d lines.",
            model.table_name,
            content.count("\n") + 1,
        )
        return content

    @staticmethod
    def _id_param_block() -> List[str]:
        return [
            f"{_T}id, err := GetIDParam(c)",
            f"{_T}if err != nil {{",
            f'{_TT}Error(c, 400, "invalid id")',
            f"{_TT}return",
            f"{_T}}}",
        ]

    @staticmethod
    def _page_reply(var_name: str) -> List[str]:
        return [
            f"{_T}Success(c, gin.H{{",
            f'{_TT}"list":      {var_name}List,',
            f'{_TT}"total":     total,',
            f'{_TT}"page":      page,',
            f'{_TT}"page_size": pageSize,',
            f"{_T}}})",
        ]


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "GENERATED_HEADER",
    "BASE_FILE_NAME",
    "BASE_RECORD_COLUMNS",
    "GO_KEYWORDS",
    "TemplateRenderer",
    "go_string",
]
