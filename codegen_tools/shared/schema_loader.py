"""Schema document loading with caching support.

A schema document is the already-introspected description of a database::

    schema: public
    tables:
      - name: users
        columns:
          - {name: id, type: integer, primary_key: true, nullable: false}
          - {name: role, type: enum, values: [admin, member]}
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Iterator, Sequence

import yaml

from .errors import SchemaError, SchemaValidationError

SCHEMA_SUFFIXES: Final[tuple[str, ...]] = (".yaml", ".yml", ".json")


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Immutable cache key for schema files."""

    path: Path
    mtime: float
    size: int

    @classmethod
    def from_path(cls, path: Path) -> CacheKey:
        """Create a cache key from a file path."""
        stat = path.stat()
        return cls(
            path=path.resolve(),
            mtime=stat.st_mtime,
            size=stat.st_size,
        )


@dataclass
class CachedSchema:
    """A cached schema with metadata."""

    data: dict[str, Any]
    key: CacheKey


class SchemaCache:
    """Schema cache with automatic invalidation.

    Parsed documents are reused until the underlying file changes
    (based on mtime and size).
    """

    __slots__ = ("_cache", "_max_size")

    def __init__(self, max_size: int = 100) -> None:
        self._cache: dict[Path, CachedSchema] = {}
        self._max_size = max_size

    def get(self, path: Path) -> dict[str, Any]:
        """Get a schema from cache, loading it if necessary.

        Raises:
            SchemaError: If the schema cannot be read or parsed.
        """
        resolved = path.resolve()
        try:
            current_key = CacheKey.from_path(resolved)
        except OSError as e:
            raise SchemaError(f"Failed to read schema file: {e}", str(path)) from e

        cached = self._cache.get(resolved)
        if cached is not None and cached.key == current_key:
            return cached.data

        data = load_schema(resolved)

        if len(self._cache) >= self._max_size:
            oldest = next(iter(self._cache))
            del self._cache[oldest]

        self._cache[resolved] = CachedSchema(
            data=data,
            key=current_key,
        )

        return data

    def invalidate(self, path: Path | None = None) -> None:
        """Invalidate cached schemas.

        Args:
            path: Specific path to invalidate, or None to clear all.
        """
        if path is None:
            self._cache.clear()
        else:
            self._cache.pop(path.resolve(), None)

    def __len__(self) -> int:
        return len(self._cache)


def load_schema(schema_path: Path) -> dict[str, Any]:
    """Load a schema document from a YAML or JSON file.

    Raises:
        SchemaError: If the file cannot be read or parsed.
    """
    try:
        content = schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(f"Failed to read schema file: {e}", str(schema_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML: {e}", str(schema_path)) from e

    if not isinstance(data, dict):
        raise SchemaError("Schema root must be a mapping", str(schema_path))

    return data


def iter_tables(
    schema: dict[str, Any],
    schema_path: str | None = None,
) -> Iterator[dict[str, Any]]:
    """Yield the table mappings of a schema document.

    Only the shape needed to read names is checked; column types are
    passed through untouched.

    Raises:
        SchemaValidationError: If ``tables`` or a table entry is malformed.
    """
    tables = schema.get("tables")
    if not isinstance(tables, list):
        raise SchemaValidationError("schema must provide a 'tables' list", schema_path)

    for index, table in enumerate(tables):
        if not isinstance(table, dict) or not table.get("name"):
            raise SchemaValidationError(
                "table entry must be a mapping with a 'name'",
                schema_path,
                field=f"tables[{index}]",
            )
        columns = table.get("columns", [])
        if not isinstance(columns, list) or not all(
            isinstance(col, dict) and col.get("name") for col in columns
        ):
            raise SchemaValidationError(
                "columns must be a list of mappings with a 'name'",
                schema_path,
                field=str(table["name"]),
            )
        yield table


def collect_schema_paths(inputs: Sequence[Path]) -> list[Path]:
    """Collect all schema files from the given inputs.

    Args:
        inputs: Paths to schema files or directories.

    Returns:
        List of unique, resolved schema file paths.

    Raises:
        FileNotFoundError: If any input path doesn't exist.
    """

    def _iter_paths() -> Iterator[Path]:
        for raw in inputs:
            path = raw.resolve()
            if not path.exists():
                raise FileNotFoundError(f"Schema path '{raw}' does not exist")
            if path.is_dir():
                yield from sorted(
                    p
                    for p in path.iterdir()
                    if p.is_file() and p.suffix in SCHEMA_SUFFIXES
                )
            else:
                yield path

    seen: dict[Path, None] = {}
    for path in _iter_paths():
        seen.setdefault(path, None)

    return list(seen.keys())
