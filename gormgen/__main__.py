# File: gormgen/__main__.py
"""
gormgen - Module entry point.

Allows running the generator directly via::

    python -m gormgen --database shop --service --router

This module simply delegates to the CLI entry point defined in ``gormgen.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from gormgen.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
