"""DBML Exporter - Writes a DBML diagram of the schema documents."""

from .main import (
    DbmlEnum,
    DbmlTable,
    ExporterContext,
    export,
    main,
    render_dbml,
    DEFAULT_OUTPUT_FILE,
)

__all__ = [
    "DbmlEnum",
    "DbmlTable",
    "ExporterContext",
    "export",
    "main",
    "render_dbml",
    "DEFAULT_OUTPUT_FILE",
]
