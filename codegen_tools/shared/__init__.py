"""Shared utilities for the code generators."""

from .config import (
    DEFAULT_NAMING,
    GeneratorOptions,
    NamingConfiguration,
    load_options,
    options_from_mapping,
)
from .console import DiffPart, diff_chars, draw_table, render_diff
from .errors import (
    ArtifactError,
    ConfigurationError,
    SchemaError,
    SchemaValidationError,
)
from .naming import (
    CaseStyle,
    SingularizationMode,
    format_name,
    get_mode_singularize,
    normalize,
    normalize_singular,
    omit_id,
    pluralize,
    singularize,
    table_to_model,
    to_camel_case,
    to_configurable_enum_name,
    to_constant_case,
    to_kebab_case,
    to_pascal_case,
    to_property_name,
    to_snake_case,
)
from .schema_loader import (
    SchemaCache,
    collect_schema_paths,
    iter_tables,
    load_schema,
)

__all__ = [
    # Configuration
    "DEFAULT_NAMING",
    "GeneratorOptions",
    "NamingConfiguration",
    "load_options",
    "options_from_mapping",
    # Console output
    "DiffPart",
    "diff_chars",
    "draw_table",
    "render_diff",
    # Errors
    "ArtifactError",
    "ConfigurationError",
    "SchemaError",
    "SchemaValidationError",
    # Naming utilities
    "CaseStyle",
    "SingularizationMode",
    "format_name",
    "get_mode_singularize",
    "normalize",
    "normalize_singular",
    "omit_id",
    "pluralize",
    "singularize",
    "table_to_model",
    "to_camel_case",
    "to_configurable_enum_name",
    "to_constant_case",
    "to_kebab_case",
    "to_pascal_case",
    "to_property_name",
    "to_snake_case",
    # Schema loading
    "SchemaCache",
    "collect_schema_paths",
    "iter_tables",
    "load_schema",
]
