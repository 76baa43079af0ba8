# File: gormgen/config.py
"""
gormgen - Configuration Resolver
================================
Merges command-line options with an optional YAML configuration file into a
single validated ``Settings`` object.

Precedence, per field:
    1. a command-line value that is *set* (non-empty string, non-zero port,
       ``True`` flag);
    2. the config file value;
    3. the built-in default.

Config file layout::

    database: {host: localhost, port: 3306, user: root, password: "", database: shop}
    output:   {path: internal/models, package: models}
    tables:   "users,orders"
    options:  {generate_base_model: true, use_soft_delete: true,
               generate_json_tags: true, generate_gorm_tags: true,
               generate_comments: true, generate_router: false,
               generate_service: false}
    router:   {output: internal/router}
    service:  {output: internal/services}
    imports:  {model: ..., service: ..., storage: ...}
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from sqlalchemy.engine import URL

from gormgen.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gormgen.config")

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CONFIG_PATH: str = "config.yaml"
DEFAULT_HOST: str = "localhost"
DEFAULT_PORT: int = 3306
DEFAULT_USER: str = "root"
DEFAULT_OUTPUT: str = "internal/models"
DEFAULT_PACKAGE: str = "models"
DRIVER_NAME: str = "mysql+pymysql"

_FILE_CONFIG: ConfigDict = ConfigDict(extra="ignore", populate_by_name=True)


# ---------------------------------------------------------------------------
# Config file models
# ---------------------------------------------------------------------------


class DatabaseSection(BaseModel):
    model_config = _FILE_CONFIG

    host: str = ""
    port: int = 0
    user: str = ""
    password: str = ""
    database: str = ""


class OutputSection(BaseModel):
    model_config = _FILE_CONFIG

    path: str = ""
    package: str = ""


class OptionsSection(BaseModel):
    model_config = _FILE_CONFIG

    generate_base_model: bool = True
    use_soft_delete: bool = True
    generate_json_tags: bool = True
    generate_gorm_tags: bool = True
    generate_comments: bool = True
    generate_router: bool = False
    generate_service: bool = False


class LayerOutputSection(BaseModel):
    model_config = _FILE_CONFIG

    output: str = ""


class ImportsSection(BaseModel):
    model_config = _FILE_CONFIG

    model: str = ""
    service: str = ""
    storage: str = ""


class ConfigFile(BaseModel):
    """Parsed YAML configuration file."""

    model_config = _FILE_CONFIG

    database: DatabaseSection = Field(default_factory=DatabaseSection)
    output: OutputSection = Field(default_factory=OutputSection)
    tables: str = ""
    options: OptionsSection = Field(default_factory=OptionsSection)
    router: LayerOutputSection = Field(default_factory=LayerOutputSection)
    service: LayerOutputSection = Field(default_factory=LayerOutputSection)
    imports: ImportsSection = Field(default_factory=ImportsSection)


# ---------------------------------------------------------------------------
# Resolved settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """
    The fully resolved settings the pipeline runs with.

    ``service_output_path`` and ``router_output_path`` default to the
    ``services`` and ``router`` siblings of ``output_path``.
    """

    model_config = ConfigDict(extra="forbid")

    # -- Connection ---------------------------------------------------------
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    user: str = DEFAULT_USER
    password: str = ""
    database: str = ""

    # -- Record layer -------------------------------------------------------
    output_path: str = DEFAULT_OUTPUT
    package_name: str = DEFAULT_PACKAGE
    table_filter: str = ""

    # -- Layers -------------------------------------------------------------
    generate_service: bool = False
    generate_router: bool = False
    service_output_path: str = ""
    router_output_path: str = ""

    # -- Cross-layer import paths ------------------------------------------
    model_import_path: str = ""
    service_import_path: str = ""
    storage_import_path: str = ""

    # -- Options ------------------------------------------------------------
    generate_base_model: bool = True
    use_soft_delete: bool = True
    generate_json_tags: bool = True
    generate_gorm_tags: bool = True
    generate_comments: bool = True

    @model_validator(mode="after")
    def _default_layer_paths(self) -> "Settings":
        if not self.service_output_path:
            self.service_output_path = os.path.normpath(
                os.path.join(self.output_path, "..", "services")
            )
        if not self.router_output_path:
            self.router_output_path = os.path.normpath(
                os.path.join(self.output_path, "..", "router")
            )
        if not self.model_import_path:
            self.model_import_path = self.package_name
        if not self.service_import_path:
            self.service_import_path = "services"
        if not self.storage_import_path:
            self.storage_import_path = "storage"
        return self

    def table_names(self) -> List[str]:
        """The explicit table list, or an empty list meaning all tables."""
        return [name.strip() for name in self.table_filter.split(",") if name.strip()]

    def database_url(self) -> URL:
        """SQLAlchemy URL for the configured MySQL server."""
        return URL.create(
            DRIVER_NAME,
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.database,
            query={"charset": "utf8mb4"},
        )


# ---------------------------------------------------------------------------
# Loading & merging
# ---------------------------------------------------------------------------


def load_config_file(path: Optional[Path]) -> Optional[ConfigFile]:
    """
    Load the YAML config file at *path*.

    A missing file is not an error: a warning is logged and ``None`` is
    returned so command-line options alone are used.

    Raises:
        ConfigurationError: if the file exists but cannot be read or parsed.
    """
    if path is None:
        return None
    if not path.exists():
        logger.warning("Config file %s not found; using command-line options.", path)
        return None

    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"cannot read config file {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"config file {path} must contain a mapping, got {type(data).__name__}"
        )

    try:
        config: ConfigFile = ConfigFile.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid config file {path}: {exc}") from exc

    logger.info("Loaded config file: %s", path)
    return config


def _pick(cli_value: Any, file_value: Any) -> Any:
    return cli_value if cli_value else file_value


def merge_config(
    cli_options: Dict[str, Any],
    file_config: Optional[ConfigFile] = None,
) -> Dict[str, Any]:
    """
    Merge command-line values over file values.

    Returns a plain dict of ``Settings`` fields; keys left empty fall back to
    the ``Settings`` defaults.
    """
    fc: ConfigFile = file_config or ConfigFile()
    get = cli_options.get
    merged: Dict[str, Any] = {
        "host": _pick(get("host"), fc.database.host),
        "port": _pick(get("port"), fc.database.port),
        "user": _pick(get("user"), fc.database.user),
        "password": _pick(get("password"), fc.database.password),
        "database": _pick(get("database"), fc.database.database),
        "output_path": _pick(get("output_path"), fc.output.path),
        "package_name": _pick(get("package_name"), fc.output.package),
        "table_filter": _pick(get("table_filter"), fc.tables),
        "generate_service": bool(get("generate_service")) or fc.options.generate_service,
        "generate_router": bool(get("generate_router")) or fc.options.generate_router,
        "service_output_path": _pick(get("service_output_path"), fc.service.output),
        "router_output_path": _pick(get("router_output_path"), fc.router.output),
        "model_import_path": _pick(get("model_import_path"), fc.imports.model),
        "service_import_path": _pick(get("service_import_path"), fc.imports.service),
        "storage_import_path": _pick(get("storage_import_path"), fc.imports.storage),
        "generate_base_model": fc.options.generate_base_model,
        "use_soft_delete": fc.options.use_soft_delete,
        "generate_json_tags": fc.options.generate_json_tags,
        "generate_gorm_tags": fc.options.generate_gorm_tags,
        "generate_comments": fc.options.generate_comments,
    }
    return {k: v for k, v in merged.items() if not _is_unset(k, v)}


def _is_unset(key: str, value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return key == "port" and value == 0


def resolve_settings(
    cli_options: Dict[str, Any],
    config_path: Optional[Path] = None,
) -> Settings:
    """
    Produce validated ``Settings`` from CLI options and the config file.

    Raises:
        ConfigurationError: no database named, or invalid values.
    """
    file_config: Optional[ConfigFile] = load_config_file(config_path)
    merged: Dict[str, Any] = merge_config(cli_options, file_config)

    try:
        settings: Settings = Settings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid settings: {exc}") from exc

    if not settings.database:
        raise ConfigurationError(
            "no database specified (use --database or database.database in the config file)"
        )

    for name in ("model_import_path", "service_import_path", "storage_import_path"):
        if not merged.get(name):
            logger.warning(
                "%s not set; generated sources will import %r.",
                name,
                getattr(settings, name),
            )
    return settings


__all__: List[str] = [
    "DEFAULT_CONFIG_PATH",
    "ConfigFile",
    "Settings",
    "load_config_file",
    "merge_config",
    "resolve_settings",
]
