"""Template variable records.

The templates interpolate every slot unconditionally, so each record is
total: every slot always holds a string, empty by default.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class ModelTemplateVars:
    """Variables for one generated model file."""

    schema_name: str = ""
    imports: str = ""
    models_import: str = ""
    model_name: str = ""
    enums: str = ""
    interfaces: str = ""
    table_name: str = ""
    fields: str = ""
    associations: str = ""
    attributes: str = ""
    options: str = ""
    types_import: str = ""

    def as_context(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class InitTemplateVars:
    """Variables for the index file that imports and exports every model."""

    import_classes: str = ""
    import_types: str = ""
    associations: str = ""
    export_classes: str = ""

    def as_context(self) -> dict[str, str]:
        return asdict(self)


def _overrides(partial: Mapping[str, Any] | None, extra: dict[str, Any]) -> dict[str, str]:
    merged = {**(partial or {}), **extra}
    # None means "not supplied": the default stays in place
    return {key: str(value) for key, value in merged.items() if value is not None}


def model_template_vars(
    partial: Mapping[str, Any] | None = None,
    **overrides: Any,
) -> ModelTemplateVars:
    """Build a ModelTemplateVars, overlaying the given slots onto the defaults.

    Raises:
        TypeError: If a slot name is unknown.

    Example:
        >>> model_template_vars({"model_name": "User"}).model_name
        'User'
    """
    return ModelTemplateVars(**_overrides(partial, overrides))


def init_template_vars(
    partial: Mapping[str, Any] | None = None,
    **overrides: Any,
) -> InitTemplateVars:
    """Build an InitTemplateVars, overlaying the given slots onto the defaults."""
    return InitTemplateVars(**_overrides(partial, overrides))
