# File: gormgen/exporters.py
"""
gormgen - Emission Sink
=======================
Writes rendered Go sources to the filesystem and keeps a record of every
file produced during a run.

- Directories are created up front by ``prepare``; ``emit`` never creates
  parents, so a missing directory surfaces as an error instead of a file
  written somewhere unexpected.
- Each file is written atomically (temp file + rename), overwriting any
  previous version.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple

from gormgen.utils import count_lines, ensure_directory, write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gormgen.exporters")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Immutable record of a single emitted file."""

    path: str
    table_name: str
    kind: str
    size_bytes: int
    line_count: int
    sha256: str


# ---------------------------------------------------------------------------
# EmissionSink
# ---------------------------------------------------------------------------


class EmissionSink:
    """
    Filesystem sink for generated sources.

    Usage::

        sink = EmissionSink()
        sink.prepare([Path("internal/models")])
        sink.emit(Path("internal/models"), "users.go", source, table_name="users")

    Thread-safety: NOT thread-safe.  Use one sink per run.
    """

    def __init__(self, *, atomic_writes: bool = True) -> None:
        self._atomic_writes: bool = atomic_writes
        self._records: List[FileRecord] = []

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def prepare(self, directories: Iterable[Path]) -> None:
        """Create every output directory.  Raises ``OSError`` on failure."""
        for directory in directories:
            ensure_directory(directory)
            logger.info("Output directory ready: %s", directory)

    def emit(
        self,
        directory: Path,
        file_name: str,
        content: str,
        *,
        table_name: str = "",
        kind: str = "",
    ) -> FileRecord:
        """
        Write *content* to ``directory / file_name``.

        Raises:
            OSError: if the directory is missing or the write fails.
        """
        target: Path = directory / file_name
        size_bytes: int = write_file(target, content, atomic=self._atomic_writes)

        record: FileRecord = FileRecord(
            path=str(target),
            table_name=table_name,
            kind=kind,
            size_bytes=size_bytes,
            line_count=count_lines(content),
            sha256=hashlib.sha256(content.encode("utf-8")).hexdigest(),
        )
        self._records.append(record)
        logger.debug(
            "Wrote file: %s (%d bytes, %d lines).",
            target,
            record.size_bytes,
            record.line_count,
        )
        return record

    @property
    def records(self) -> Tuple[FileRecord, ...]:
        return tuple(self._records)

    @property
    def total_bytes(self) -> int:
        return sum(r.size_bytes for r in self._records)

    @property
    def total_lines(self) -> int:
        return sum(r.line_count for r in self._records)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "EmissionSink",
    "FileRecord",
]

logger.debug("gormgen.exporters loaded.")
