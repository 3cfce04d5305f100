#!/usr/bin/env python3
"""
Unified CLI for the schema code generators.

Usage:
    python -m codegen_tools <command> [options]

Commands:
    models      Generate Sequelize TypeScript models from schema documents
    dbml        Export schema documents as a DBML diagram

Examples:
    python -m codegen_tools models schemas/ --output-dir src/models
    python -m codegen_tools models schemas/app.yaml --config codegen.yaml --dry-run
    python -m codegen_tools dbml schemas/ --output docs/schema.dbml
"""

from __future__ import annotations

import sys
from typing import Callable


def _run(entry_point: Callable[[list[str]], None], args: list[str]) -> int:
    """Run a generator entry point, translating SystemExit into a return code."""
    try:
        entry_point(args)
        return 0
    except SystemExit as e:
        if e.code is None:
            return 0
        if isinstance(e.code, int):
            return e.code
        print(e.code, file=sys.stderr)
        return 1


def cmd_models(args: list[str]) -> int:
    """Generate model files."""
    from codegen_tools.model_codegen import main as models_main
    return _run(models_main, args)


def cmd_dbml(args: list[str]) -> int:
    """Export a DBML diagram."""
    from codegen_tools.dbml_export import main as dbml_main
    return _run(dbml_main, args)


COMMANDS = {
    "models": (cmd_models, "Generate Sequelize TypeScript models from schema documents"),
    "dbml": (cmd_dbml, "Export schema documents as a DBML diagram"),
}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    if not argv or argv[0] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command, args = argv[0], argv[1:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
