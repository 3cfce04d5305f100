#!/usr/bin/env python3
"""
Code generator wrapper.

This is a convenience wrapper that forwards to the codegen_tools module.
Run with --help to see available commands.

Usage:
    python build.py <command> [options]
    ./build.py <command> [options]  (on Unix with execute permission)

Commands:
    models      Generate Sequelize TypeScript models from schema documents
    dbml        Export schema documents as a DBML diagram

Examples:
    python build.py models schemas/ --output-dir src/models
    python build.py models schemas/ --config codegen.yaml --dry-run
    python build.py dbml schemas/ --output docs/schema.dbml
"""

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def main() -> int:
    """Forward all arguments to the codegen_tools module."""
    return subprocess.call(
        [sys.executable, "-m", "codegen_tools"] + sys.argv[1:],
        cwd=ROOT,
    )


if __name__ == "__main__":
    sys.exit(main())
