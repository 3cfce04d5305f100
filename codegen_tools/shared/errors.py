"""Custom exceptions for the code generators."""

from __future__ import annotations


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    def __init__(self, message: str, schema_path: str | None = None) -> None:
        self.schema_path = schema_path
        full_message = f"{message}" if not schema_path else f"[{schema_path}] {message}"
        super().__init__(full_message)


class SchemaValidationError(SchemaError):
    """Raised when a schema document does not have the expected shape."""

    def __init__(
        self,
        message: str,
        schema_path: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, schema_path)


class ConfigurationError(Exception):
    """Raised when generator configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        key: str | None = None,
    ) -> None:
        self.config_path = config_path
        self.key = key
        if key:
            message = f"Key '{key}': {message}"
        full_message = message if not config_path else f"[{config_path}] {message}"
        super().__init__(full_message)


class ArtifactError(Exception):
    """Raised when a generated file cannot be read or written."""

    def __init__(self, message: str, path: str, operation: str) -> None:
        self.path = path
        self.operation = operation
        super().__init__(f"Failed to {operation} '{path}': {message}")
