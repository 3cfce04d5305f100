"""Naming policy bound to one generation run."""

from __future__ import annotations

from ..shared.config import GeneratorOptions, NamingConfiguration
from ..shared.errors import ConfigurationError
from ..shared.naming import format_name, get_mode_singularize


class NamingPolicy:
    """Resolves model, file and property names under a NamingConfiguration.

    The configuration is bound once and never changes, so one policy can be
    shared by every name lookup of a run.
    """

    __slots__ = ("_naming",)

    def __init__(self, options: GeneratorOptions) -> None:
        if options.naming is None:
            raise ConfigurationError(
                "naming configuration is missing",
                key="generator.model.naming",
            )
        self._naming = options.naming

    @classmethod
    def create(cls, options: GeneratorOptions) -> NamingPolicy:
        return cls(options)

    @property
    def naming(self) -> NamingConfiguration:
        return self._naming

    def resolve_model_name(self, table_name: str) -> str:
        """Singularize/pluralize per configuration, then apply the model case."""
        return format_name(
            get_mode_singularize(table_name, self._naming.singularize_model),
            self._naming.model,
        )

    def resolve_file_name(self, table_name: str) -> str:
        """Same pipeline as the model name, rendered in the file case."""
        return format_name(
            get_mode_singularize(table_name, self._naming.singularize_model),
            self._naming.file,
        )

    def resolve_property_name(self, name: str) -> str:
        """Re-case a column name. Property names keep their number."""
        return format_name(name, self._naming.property)
