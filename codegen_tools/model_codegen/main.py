"""
Model Code Generator - Generates Sequelize TypeScript models from schema documents.

Each table becomes one model file; an index file imports, initializes and
re-exports every model. Names follow the configured naming policy, and a
dry run prints a diff per file instead of writing.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Sequence, TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..shared import (
    DEFAULT_NAMING,
    ConfigurationError,
    GeneratorOptions,
    SchemaCache,
    SchemaError,
    collect_schema_paths,
    iter_tables,
    load_options,
    to_configurable_enum_name,
    to_pascal_case,
    to_snake_case,
)
from .code_file import CodeFile, GenerationSummary, materialize
from .naming_policy import NamingPolicy
from .template_vars import init_template_vars, model_template_vars

# Schema column types to (TypeScript type, Sequelize data type)
DEFAULT_TS_TYPES: Final[dict[str, tuple[str, str]]] = {
    "uuid": ("string", "DataTypes.UUID"),
    "string": ("string", "DataTypes.STRING"),
    "varchar": ("string", "DataTypes.STRING"),
    "text": ("string", "DataTypes.TEXT"),
    "integer": ("number", "DataTypes.INTEGER"),
    "smallint": ("number", "DataTypes.SMALLINT"),
    "bigint": ("string", "DataTypes.BIGINT"),
    "float": ("number", "DataTypes.FLOAT"),
    "double": ("number", "DataTypes.DOUBLE"),
    "decimal": ("string", "DataTypes.DECIMAL"),
    "boolean": ("boolean", "DataTypes.BOOLEAN"),
    "timestamp": ("Date", "DataTypes.DATE"),
    "date": ("string", "DataTypes.DATEONLY"),
    "time": ("string", "DataTypes.TIME"),
    "json": ("Record<string, unknown>", "DataTypes.JSON"),
    "jsonb": ("Record<string, unknown>", "DataTypes.JSONB"),
    "blob": ("Buffer", "DataTypes.BLOB"),
}

FALLBACK_TS_TYPE: Final[str] = "unknown"

MODEL_IMPORTS: Final[str] = (
    "import { DataTypes, Model } from 'sequelize';\n"
    "import type { Optional, Sequelize } from 'sequelize';"
)

DEFAULT_OUTPUT_DIR: Final[Path] = Path("models")
INDEX_FILE_NAME: Final[str] = "index.ts"

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"

INDENT: Final[str] = "  "


@dataclass(frozen=True, slots=True)
class Column:
    """A database column with its generated TypeScript representation."""

    name: str
    property_name: str
    ts_type: str
    data_type: str
    is_nullable: bool
    is_primary: bool
    default: Any
    enum_name: str | None
    enum_values: tuple[str, ...]
    comment: str | None

    @property
    def is_optional_on_create(self) -> bool:
        return self.is_primary or self.is_nullable or self.default is not None


@dataclass(frozen=True, slots=True)
class ModelSpec:
    """A generated model and the file it lives in."""

    model_name: str
    file_name: str
    table_name: str


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

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
        self._model_template = self.template_env.get_template("model.ts.j2")
        self._index_template = self.template_env.get_template("index.ts.j2")

    @property
    def model_template(self):
        return self._model_template

    @property
    def index_template(self):
        return self._index_template


@lru_cache(maxsize=256)
def _quote(value: str) -> str:
    """Quote a string as a TypeScript literal. Cached for performance."""
    return json.dumps(value)


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return _quote(value)
    return json.dumps(value)


def _build_columns(
    table: dict[str, Any],
    policy: NamingPolicy,
) -> list[Column]:
    """Build Column objects from a table definition."""
    table_name = str(table["name"])
    columns: list[Column] = []

    for raw in table.get("columns", []):
        name = str(raw["name"])
        type_name = str(raw.get("type", "")).lower()
        values = tuple(str(value) for value in raw.get("values") or ())

        enum_name: str | None = None
        if values:
            enum_name = to_configurable_enum_name(table_name, name)
            ts_type = enum_name
            data_type = f"DataTypes.ENUM({', '.join(_quote(v) for v in values)})"
        elif type_name in DEFAULT_TS_TYPES:
            ts_type, data_type = DEFAULT_TS_TYPES[type_name]
        else:
            ts_type = FALLBACK_TS_TYPE
            data_type = f"DataTypes.{to_snake_case(type_name).upper() or 'STRING'}"

        comment = raw.get("comment")
        columns.append(
            Column(
                name=name,
                property_name=policy.resolve_property_name(name),
                ts_type=ts_type,
                data_type=data_type,
                is_nullable=bool(raw.get("nullable", True)),
                is_primary=bool(raw.get("primary_key", False)),
                default=raw.get("default"),
                enum_name=enum_name,
                enum_values=values,
                comment=str(comment) if comment else None,
            )
        )

    return columns


def _render_enums(columns: Sequence[Column]) -> str:
    blocks = []
    for col in columns:
        if col.enum_name is None:
            continue
        members = "\n".join(
            f"{INDENT}{to_pascal_case(value) or '_'} = {_quote(value)},"
            for value in col.enum_values
        )
        blocks.append(f"export enum {col.enum_name} {{\n{members}\n}}")
    return "\n\n".join(blocks)


def _ts_field_type(col: Column) -> str:
    return f"{col.ts_type} | null" if col.is_nullable else col.ts_type


def _render_interfaces(model_name: str, columns: Sequence[Column]) -> str:
    members = "\n".join(
        f"{INDENT}{col.property_name}: {_ts_field_type(col)};" for col in columns
    )
    optional = [col.property_name for col in columns if col.is_optional_on_create]
    attributes = f"{model_name}Attributes"

    if optional:
        keys = " | ".join(f"'{name}'" for name in optional)
        creation = f"Optional<{attributes}, {keys}>"
    else:
        creation = attributes

    return (
        f"export interface {attributes} {{\n{members}\n}}\n\n"
        f"export type {model_name}CreationAttributes = {creation};"
    )


def _render_fields(columns: Sequence[Column]) -> str:
    lines = []
    for col in columns:
        if col.comment:
            lines.append(f"{INDENT}/** {col.comment} */")
        lines.append(f"{INDENT}declare {col.property_name}: {_ts_field_type(col)};")
    return "\n".join(lines)


def _render_attributes(columns: Sequence[Column]) -> str:
    outer = INDENT * 3
    inner = INDENT * 4
    blocks = []
    for col in columns:
        lines = [f"{outer}{col.property_name}: {{", f"{inner}type: {col.data_type},"]
        if col.is_primary:
            lines.append(f"{inner}primaryKey: true,")
        lines.append(f"{inner}allowNull: {'true' if col.is_nullable else 'false'},")
        if col.property_name != col.name:
            lines.append(f"{inner}field: {_quote(col.name)},")
        if col.default is not None:
            lines.append(f"{inner}defaultValue: {_literal(col.default)},")
        if col.comment:
            lines.append(f"{inner}comment: {_quote(col.comment)},")
        lines.append(f"{outer}}},")
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def _render_options(table_name: str, schema_name: str, columns: Sequence[Column]) -> str:
    names = {col.name for col in columns}
    timestamps = {"created_at", "updated_at"} <= names or {"createdAt", "updatedAt"} <= names
    indent = INDENT * 3
    lines = [f"{indent}sequelize,", f"{indent}tableName: {_quote(table_name)},"]
    if schema_name:
        lines.append(f"{indent}schema: {_quote(schema_name)},")
    lines.append(f"{indent}timestamps: {'true' if timestamps else 'false'},")
    if timestamps and "created_at" in names:
        lines.append(f"{indent}underscored: true,")
    return "\n".join(lines)


def _render_model(
    table: dict[str, Any],
    policy: NamingPolicy,
    schema_name: str,
    ctx: GeneratorContext,
) -> tuple[ModelSpec, str]:
    """Render the model file for one table."""
    table_name = str(table["name"])
    model_name = policy.resolve_model_name(table_name)
    file_name = policy.resolve_file_name(table_name)
    columns = _build_columns(table, policy)

    template_vars = model_template_vars(
        schema_name=schema_name,
        imports=MODEL_IMPORTS,
        model_name=model_name,
        enums=_render_enums(columns),
        interfaces=_render_interfaces(model_name, columns),
        table_name=table_name,
        fields=_render_fields(columns),
        attributes=_render_attributes(columns),
        options=_render_options(table_name, schema_name, columns),
    )

    rendered = ctx.model_template.render(**template_vars.as_context())
    return ModelSpec(model_name, file_name, table_name), rendered


def _render_index(specs: Sequence[ModelSpec], ctx: GeneratorContext) -> str:
    """Render the index file for the generated models."""
    # Deduplicate and sort
    dedup: dict[str, ModelSpec] = {}
    for spec in specs:
        dedup[spec.model_name] = spec
    ordered = sorted(dedup.values(), key=lambda item: item.model_name)

    template_vars = init_template_vars(
        import_classes="\n".join(
            f"import {spec.model_name} from './{spec.file_name}';" for spec in ordered
        ),
        import_types="\n".join(
            f"export type {{ {spec.model_name}Attributes, "
            f"{spec.model_name}CreationAttributes }} from './{spec.file_name}';"
            for spec in ordered
        ),
        export_classes="\n".join(f"{INDENT}{spec.model_name}," for spec in ordered),
    )
    return ctx.index_template.render(**template_vars.as_context())


def generate(
    schema_paths: Sequence[Path],
    options: GeneratorOptions,
    *,
    stream: TextIO | None = None,
    ctx: GeneratorContext | None = None,
) -> GenerationSummary:
    """Generate model files from schema documents.

    Args:
        schema_paths: Paths to schema YAML/JSON files.
        options: Run settings; ``options.naming`` is required.
        stream: Where dry-run diffs are printed (stdout by default).
        ctx: Generator context to reuse across runs.

    Returns:
        Which files were written, previewed or failed.

    Raises:
        ConfigurationError: If the naming configuration is missing.
        SchemaError: If a schema document cannot be loaded.
    """
    policy = NamingPolicy.create(options)
    ctx = ctx or GeneratorContext()
    output_dir = options.output_dir or DEFAULT_OUTPUT_DIR
    summary = GenerationSummary()
    specs: list[ModelSpec] = []

    for schema_path in schema_paths:
        schema = ctx.schema_cache.get(schema_path)
        schema_name = options.schema_name or str(schema.get("schema") or "")

        for table in iter_tables(schema, str(schema_path)):
            spec, rendered = _render_model(table, policy, schema_name, ctx)
            specs.append(spec)
            materialize(
                CodeFile(
                    output_dir / f"{spec.file_name}.ts",
                    rendered,
                    dry_run=options.dry_run,
                    stream=stream,
                ),
                summary,
            )

    materialize(
        CodeFile(
            output_dir / INDEX_FILE_NAME,
            _render_index(specs, ctx),
            dry_run=options.dry_run,
            stream=stream,
        ),
        summary,
    )

    return summary


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate Sequelize TypeScript models from schema documents",
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
        "--output-dir",
        type=Path,
        default=None,
        help=f"Directory for generated models (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--schema-name",
        default=None,
        help="Database schema name written into the model options",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show a diff for every file instead of writing it",
    )

    args = parser.parse_args(argv)

    try:
        options = (
            load_options(args.config)
            if args.config
            else GeneratorOptions(naming=DEFAULT_NAMING)
        )
        options = options.with_overrides(
            dry_run=True if args.dry_run else None,
            output_dir=args.output_dir,
            schema_name=args.schema_name,
        )

        schema_paths = collect_schema_paths(args.paths)
        if not schema_paths:
            raise SystemExit("No schema files found")

        summary = generate(schema_paths, options)
    except (ConfigurationError, SchemaError, FileNotFoundError) as e:
        raise SystemExit(f"Error: {e}") from e

    output_dir = options.output_dir or DEFAULT_OUTPUT_DIR
    if options.dry_run:
        print(f"Previewed {len(summary.previewed)} file(s); nothing was written.")
    else:
        print(f"Generated {len(summary.written)} file(s) into {output_dir}")

    if not summary.ok:
        raise SystemExit(f"Error: {len(summary.failed)} file(s) could not be generated")


if __name__ == "__main__":
    main()
