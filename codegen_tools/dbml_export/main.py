"""
DBML Exporter - Writes a DBML diagram of the schema documents.

The diagram is saved together with a README next to it. Both files go
through CodeFile, so a dry run previews them instead of writing.
"""

from __future__ import annotations

import argparse
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Iterable, Sequence, TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..model_codegen.code_file import CodeFile, GenerationSummary, materialize
from ..shared import (
    ConfigurationError,
    GeneratorOptions,
    SchemaCache,
    SchemaError,
    collect_schema_paths,
    iter_tables,
    load_options,
    to_configurable_enum_name,
    to_snake_case,
)

DEFAULT_OUTPUT_FILE: Final[Path] = Path("docs") / "schema.dbml"
README_FILE_NAME: Final[str] = "README.md"

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"

_BARE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class DbmlEnum:
    name: str
    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DbmlTable:
    name: str
    lines: tuple[str, ...]
    note: str | None = None


@dataclass
class ExporterContext:
    """Template environment for the exporter."""

    template_env: Environment = field(init=False)
    schema_cache: SchemaCache = field(default_factory=SchemaCache)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )

    def render(self, template_name: str, **context: Any) -> str:
        return self.template_env.get_template(template_name).render(**context)


def _name(value: str) -> str:
    """Quote an identifier unless DBML accepts it bare."""
    if _BARE_NAME.match(value):
        return value
    escaped = value.replace('"', '\\"')
    return f'"{escaped}"'


def _string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _default(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return _string(str(value))


def _enum_name(table_name: str, column_name: str) -> str:
    return to_snake_case(to_configurable_enum_name(table_name, column_name))


def _column_line(table_name: str, column: dict[str, Any]) -> str:
    name = str(column["name"])
    values = column.get("values")
    type_name = _enum_name(table_name, name) if values else str(column.get("type", "unknown"))

    settings: list[str] = []
    if column.get("primary_key"):
        settings.append("pk")
    if not column.get("nullable", True):
        settings.append("not null")
    if column.get("unique"):
        settings.append("unique")
    if column.get("default") is not None:
        settings.append(f"default: {_default(column['default'])}")
    if column.get("comment"):
        settings.append(f"note: {_string(str(column['comment']))}")

    line = f"{_name(name)} {_name(type_name)}"
    return f"{line} [{', '.join(settings)}]" if settings else line


def _build_tables(
    tables: Iterable[dict[str, Any]],
    schema_name: str,
) -> tuple[list[DbmlTable], list[DbmlEnum]]:
    result: list[DbmlTable] = []
    enums: list[DbmlEnum] = []

    for table in tables:
        table_name = str(table["name"])
        columns = table.get("columns", [])
        for column in columns:
            if column.get("values"):
                enums.append(
                    DbmlEnum(
                        name=_enum_name(table_name, str(column["name"])),
                        values=tuple(_name(str(v)) for v in column["values"]),
                    )
                )
        qualified = f"{_name(schema_name)}.{_name(table_name)}" if schema_name else _name(table_name)
        note = table.get("comment")
        result.append(
            DbmlTable(
                name=qualified,
                lines=tuple(_column_line(table_name, column) for column in columns),
                note=_string(str(note)) if note else None,
            )
        )

    return result, enums


def render_dbml(
    schema: dict[str, Any],
    ctx: ExporterContext | None = None,
    *,
    schema_path: str | None = None,
    schema_name: str | None = None,
) -> str:
    """Render one schema document as DBML.

    Raises:
        SchemaValidationError: If the document has no valid ``tables`` list.
    """
    ctx = ctx or ExporterContext()
    name = schema_name if schema_name is not None else str(schema.get("schema") or "")
    tables, enums = _build_tables(iter_tables(schema, schema_path), name)
    return ctx.render("schema.dbml.j2", tables=tables, enums=enums)


def export(
    schema_paths: Sequence[Path],
    output_file: Path,
    options: GeneratorOptions,
    *,
    stream: TextIO | None = None,
    ctx: ExporterContext | None = None,
) -> GenerationSummary:
    """Export the schema documents to a DBML file plus README.

    Raises:
        SchemaError: If a schema document cannot be loaded.
    """
    ctx = ctx or ExporterContext()
    rendered = []
    for schema_path in schema_paths:
        schema = ctx.schema_cache.get(schema_path)
        rendered.append(
            render_dbml(
                schema,
                ctx,
                schema_path=str(schema_path),
                schema_name=options.schema_name,
            )
        )

    summary = GenerationSummary()
    materialize(
        CodeFile(output_file, "\n".join(rendered), dry_run=options.dry_run, stream=stream),
        summary,
    )
    materialize(
        CodeFile(
            output_file.parent / README_FILE_NAME,
            ctx.render("readme.md.j2", filename=output_file.name),
            dry_run=options.dry_run,
            stream=stream,
        ),
        summary,
    )
    return summary


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Export schema documents as a DBML diagram",
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        help="Schema file(s) or directories containing schema YAML/JSON files",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Generator configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"DBML file to write (default: {DEFAULT_OUTPUT_FILE})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show a diff instead of writing",
    )

    args = parser.parse_args(argv)
    output_file = args.output

    try:
        options = load_options(args.config) if args.config else GeneratorOptions()
        options = options.with_overrides(dry_run=True if args.dry_run else None)
        output_file = output_file or options.dbml_file or DEFAULT_OUTPUT_FILE

        schema_paths = collect_schema_paths(args.paths)
        if not schema_paths:
            raise SystemExit("No schema files found")

        summary = export(schema_paths, output_file, options)
    except (ConfigurationError, SchemaError, FileNotFoundError) as e:
        print(
            f"Error exporting DBML diagram to {output_file or DEFAULT_OUTPUT_FILE}: {e}",
            file=sys.stderr,
        )
        raise SystemExit(1) from e

    if not summary.ok:
        raise SystemExit(f"Error: {len(summary.failed)} file(s) could not be written")

    if not options.dry_run:
        print(f"Successfully exported DBML diagram to {output_file}")
