"""Generator configuration loading.

Configuration files are YAML (JSON is accepted as well, being a subset)::

    dry_run: false
    output_dir: src/models
    generator:
      model:
        naming:
          model: pascal
          file: pascal
          property: camel
          singularize_model: singular
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigurationError
from .naming import CaseStyle, SingularizationMode


@dataclass(frozen=True, slots=True)
class NamingConfiguration:
    """Case rules applied to generated identifiers.

    ``None`` in any field leaves the corresponding name unchanged.
    """

    model: CaseStyle | None = None
    file: CaseStyle | None = None
    property: CaseStyle | None = None
    singularize_model: SingularizationMode | None = None


DEFAULT_NAMING = NamingConfiguration(
    model=CaseStyle.PASCAL,
    file=CaseStyle.PASCAL,
    property=CaseStyle.CAMEL,
    singularize_model=SingularizationMode.SINGULAR,
)


@dataclass(frozen=True, slots=True)
class GeneratorOptions:
    """Settings for one generation run."""

    dry_run: bool = False
    output_dir: Path | None = None
    schema_name: str | None = None
    naming: NamingConfiguration | None = None
    dbml_file: Path | None = None

    def with_overrides(self, **changes: Any) -> GeneratorOptions:
        """Return a copy with every non-``None`` keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _section(
    data: Mapping[str, Any],
    key: str,
    config_path: str | None,
    dotted: str,
) -> Mapping[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ConfigurationError("must be a mapping", config_path, dotted)
    return value


def _enum_value(enum_type, raw: Any, config_path: str | None, key: str):
    if raw is None:
        return None
    try:
        return enum_type(str(raw))
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ConfigurationError(
            f"invalid value '{raw}' (expected one of: {allowed})",
            config_path,
            key,
        ) from None


def naming_from_mapping(
    data: Mapping[str, Any],
    config_path: str | None = None,
) -> NamingConfiguration:
    """Build a NamingConfiguration from its configuration section."""
    prefix = "generator.model.naming"
    return NamingConfiguration(
        model=_enum_value(CaseStyle, data.get("model"), config_path, f"{prefix}.model"),
        file=_enum_value(CaseStyle, data.get("file"), config_path, f"{prefix}.file"),
        property=_enum_value(
            CaseStyle, data.get("property"), config_path, f"{prefix}.property"
        ),
        singularize_model=_enum_value(
            SingularizationMode,
            data.get("singularize_model"),
            config_path,
            f"{prefix}.singularize_model",
        ),
    )


def options_from_mapping(
    data: Mapping[str, Any],
    config_path: str | None = None,
) -> GeneratorOptions:
    """Validate a parsed configuration document.

    A missing ``generator.model.naming`` section is not defaulted; it is
    reported when the naming policy is built.

    Raises:
        ConfigurationError: If a section or value is invalid.
    """
    generator = _section(data, "generator", config_path, "generator") or {}
    model = _section(generator, "model", config_path, "generator.model") or {}
    naming_section = _section(model, "naming", config_path, "generator.model.naming")

    dry_run = data.get("dry_run", False)
    if dry_run is None:
        dry_run = False
    elif not isinstance(dry_run, bool):
        raise ConfigurationError(
            f"invalid value '{dry_run}' (expected a boolean)", config_path, "dry_run"
        )

    output_dir = data.get("output_dir")
    dbml_file = data.get("dbml_file")
    schema_name = data.get("schema_name")

    return GeneratorOptions(
        dry_run=dry_run,
        output_dir=Path(output_dir) if output_dir else None,
        schema_name=str(schema_name) if schema_name else None,
        naming=(
            naming_from_mapping(naming_section, config_path)
            if naming_section is not None
            else None
        ),
        dbml_file=Path(dbml_file) if dbml_file else None,
    )


def load_options(config_path: Path) -> GeneratorOptions:
    """Load generator options from a YAML or JSON file.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}", str(config_path)
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", str(config_path)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration root must be a mapping", str(config_path))

    return options_from_mapping(data, str(config_path))
