# File: gormgen/cli.py
"""
gormgen - Command-Line Interface
================================

CLI built with the standard-library ``argparse`` module.

Usage examples::

    # Record layer only, settings from ./config.yaml
    python -m gormgen --database shop

    # All three layers for two tables
    python -m gormgen -d shop --tables users,orders --service --router \\
        --model-import github.com/acme/shop/internal/models \\
        --service-import github.com/acme/shop/internal/services \\
        --storage-import github.com/acme/shop/internal/storage

    # Show version
    python -m gormgen --version

Exit codes:
    0 - success (skipped tables do not fail the run)
    1 - configuration error
    2 - setup error (connection, ping, output tree)
    3 - introspection error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Sequence

from gormgen.errors import ConfigurationError, IntrospectionError

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gormgen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_CONFIG_ERROR: int = 1
EXIT_SETUP_ERROR: int = 2
EXIT_INTROSPECTION_ERROR: int = 3


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the root gormgen logger based on verbosity level.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("gormgen")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from gormgen import __version__
    from gormgen.config import DEFAULT_CONFIG_PATH

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="gormgen",
        description=(
            "gormgen - GORM model, service and gin router generator.\n\n"
            "Reads table metadata from a MySQL server and writes Go sources "
            "for the record, persistence and routing layers."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s --database shop\n"
            "  %(prog)s -d shop --tables users,orders --service --router\n"
            "  %(prog)s --config deploy/gormgen.yaml -v\n"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"gormgen v{__version__}",
    )

    # --- Connection ---
    db_group = parser.add_argument_group("database connection")
    db_group.add_argument("--host", type=str, default=None, help="Database host (default: localhost).")
    db_group.add_argument("--port", type=int, default=None, help="Database port (default: 3306).")
    db_group.add_argument("-u", "--user", type=str, default=None, help="Database user (default: root).")
    db_group.add_argument("-p", "--password", type=str, default=None, help="Database password.")
    db_group.add_argument("-d", "--database", type=str, default=None, help="Schema to read (required).")

    # --- Record layer ---
    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        metavar="DIR",
        help="Record layer directory (default: internal/models).",
    )
    output_group.add_argument(
        "--package",
        type=str,
        default=None,
        metavar="NAME",
        help="Go package of the record layer (default: models).",
    )
    output_group.add_argument(
        "-t", "--tables",
        type=str,
        default=None,
        metavar="LIST",
        help="Comma-separated table names; all tables when omitted.",
    )
    output_group.add_argument(
        "-c", "--config",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        metavar="PATH",
        help=f"YAML config file (default: {DEFAULT_CONFIG_PATH}).",
    )

    # --- Optional layers ---
    layer_group = parser.add_argument_group("optional layers")
    layer_group.add_argument("--service", action="store_true", default=False, help="Generate the service layer.")
    layer_group.add_argument("--router", action="store_true", default=False, help="Generate the router layer.")
    layer_group.add_argument("--service-output", type=str, default=None, metavar="DIR", help="Service layer directory.")
    layer_group.add_argument("--router-output", type=str, default=None, metavar="DIR", help="Router layer directory.")
    layer_group.add_argument("--model-import", type=str, default=None, metavar="PATH", help="Go import path of the record layer.")
    layer_group.add_argument("--service-import", type=str, default=None, metavar="PATH", help="Go import path of the service layer.")
    layer_group.add_argument(
        "--storage-import",
        type=str,
        default=None,
        metavar="PATH",
        help="Go import path whose /mysql package exposes the DB handle.",
    )

    # --- Verbosity ---
    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all log output.",
    )

    return parser


def _cli_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Map parsed arguments onto ``Settings`` field names."""
    return {
        "host": args.host,
        "port": args.port,
        "user": args.user,
        "password": args.password,
        "database": args.database,
        "output_path": args.output,
        "package_name": args.package,
        "table_filter": args.tables,
        "generate_service": args.service,
        "generate_router": args.router,
        "service_output_path": args.service_output,
        "router_output_path": args.router_output,
        "model_import_path": args.model_import,
        "service_import_path": args.service_import,
        "storage_import_path": args.storage_import,
    }


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def _exit_code_for(error: Optional[Exception]) -> int:
    if error is None:
        return EXIT_SUCCESS
    if isinstance(error, ConfigurationError):
        return EXIT_CONFIG_ERROR
    if isinstance(error, IntrospectionError):
        return EXIT_INTROSPECTION_ERROR
    return EXIT_SETUP_ERROR


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Parse *argv*, run the pipeline and return the exit code.

    ``cli_main`` wraps this with ``sys.exit``.
    """
    from gormgen.config import Settings, resolve_settings
    from gormgen.generator import CodeGenerator, GenerationReport

    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.quiet:
        logging.disable(logging.CRITICAL)
        verbosity: int = 0
    else:
        logging.disable(logging.NOTSET)
        verbosity = args.verbose
    _setup_logging(verbosity)

    try:
        settings: Settings = resolve_settings(_cli_options(args), Path(args.config))
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR

    logger.info("Database: %s@%s:%d/%s", settings.user, settings.host, settings.port, settings.database)
    logger.info("Output:   %s (package %s)", settings.output_path, settings.package_name)
    logger.info("Layers:   service=%s router=%s", settings.generate_service, settings.generate_router)

    report: GenerationReport = CodeGenerator(settings).run()
    print(report.summary())

    exit_code: int = _exit_code_for(report.fatal_error)
    if exit_code == EXIT_SUCCESS:
        logger.info("Generation completed successfully.")
    else:
        logger.error("Generation failed with exit code %d.", exit_code)
    return exit_code


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Can be called from ``__main__.py`` or directly for testing.
    """
    sys.exit(run(argv))


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "run",
    "EXIT_SUCCESS",
    "EXIT_CONFIG_ERROR",
    "EXIT_SETUP_ERROR",
    "EXIT_INTROSPECTION_ERROR",
]

logger.debug("gormgen.cli loaded.")
