from dataclasses import fields
from pathlib import Path

import pytest

from codegen_tools.shared.errors import SchemaError, SchemaValidationError
from codegen_tools.shared.schema_loader import (
    CacheKey,
    CachedSchema,
    SchemaCache,
    collect_schema_paths,
    iter_tables,
    load_schema,
)

USERS_SCHEMA = """\
schema: public
tables:
  - name: users
    columns:
      - {name: id, type: integer, primary_key: true}
"""


class TestCacheKey:
    def test_from_path(self, tmp_path):
        file_path = tmp_path / "app.yaml"
        file_path.write_text(USERS_SCHEMA)

        key = CacheKey.from_path(file_path)
        assert key.path == file_path.resolve()
        assert isinstance(key.mtime, float)
        assert key.size == len(USERS_SCHEMA)

    def test_frozen(self, tmp_path):
        file_path = tmp_path / "app.yaml"
        file_path.write_text(USERS_SCHEMA)

        key = CacheKey.from_path(file_path)
        with pytest.raises(AttributeError):
            key.path = Path("/new/path")


class TestCachedSchema:
    def test_init(self, tmp_path):
        file_path = tmp_path / "app.yaml"
        file_path.write_text(USERS_SCHEMA)
        key = CacheKey.from_path(file_path)

        cached = CachedSchema({"tables": []}, key)
        assert cached.data == {"tables": []}
        assert cached.key == key

    def test_holds_only_document_and_key(self):
        assert [f.name for f in fields(CachedSchema)] == ["data", "key"]


class TestSchemaCache:
    def test_init(self):
        cache = SchemaCache()
        assert len(cache) == 0
        assert cache._max_size == 100

    def test_get_new_schema(self, tmp_path):
        cache = SchemaCache()
        schema_path = tmp_path / "app.yaml"
        schema_path.write_text(USERS_SCHEMA)

        data = cache.get(schema_path)
        assert data["schema"] == "public"
        assert data["tables"][0]["name"] == "users"
        assert len(cache) == 1

    def test_get_cached_schema(self, tmp_path):
        cache = SchemaCache()
        schema_path = tmp_path / "app.yaml"
        schema_path.write_text(USERS_SCHEMA)

        assert cache.get(schema_path) is cache.get(schema_path)

    def test_get_schema_file_changed(self, tmp_path):
        cache = SchemaCache()
        schema_path = tmp_path / "app.yaml"
        schema_path.write_text("schema: public\n")

        data1 = cache.get(schema_path)
        schema_path.write_text("schema: reporting\n")
        data2 = cache.get(schema_path)

        assert data1 != data2
        assert data2 == {"schema": "reporting"}

    def test_get_missing_file(self, tmp_path):
        cache = SchemaCache()
        with pytest.raises(SchemaError) as exc_info:
            cache.get(tmp_path / "missing.yaml")
        assert "Failed to read schema file" in str(exc_info.value)

    def test_get_schema_max_cache_size(self, tmp_path):
        cache = SchemaCache(max_size=2)
        for i in range(3):
            path = tmp_path / f"schema{i}.yaml"
            path.write_text(f"schema: s{i}\n")
            cache.get(path)

        assert len(cache) == 2

    def test_invalidate(self, tmp_path):
        cache = SchemaCache()
        schema_path = tmp_path / "app.yaml"
        schema_path.write_text(USERS_SCHEMA)

        cache.get(schema_path)
        cache.invalidate(schema_path)
        assert len(cache) == 0

        cache.get(schema_path)
        cache.invalidate()
        assert len(cache) == 0


class TestLoadSchema:
    def test_load_yaml(self, tmp_path):
        schema_path = tmp_path / "app.yaml"
        schema_path.write_text(USERS_SCHEMA)

        data = load_schema(schema_path)
        assert data["tables"][0]["columns"][0]["primary_key"] is True

    def test_load_json(self, tmp_path):
        schema_path = tmp_path / "app.json"
        schema_path.write_text('{"schema": "public", "tables": []}')

        assert load_schema(schema_path) == {"schema": "public", "tables": []}

    def test_load_schema_file_not_found(self, tmp_path):
        with pytest.raises(SchemaError) as exc_info:
            load_schema(tmp_path / "nonexistent.yaml")

        assert "Failed to read schema file" in str(exc_info.value)

    def test_load_schema_invalid_yaml(self, tmp_path):
        schema_path = tmp_path / "app.yaml"
        schema_path.write_text("invalid: yaml: content: [\n")

        with pytest.raises(SchemaError) as exc_info:
            load_schema(schema_path)

        assert "Invalid YAML" in str(exc_info.value)

    def test_load_schema_not_dict(self, tmp_path):
        schema_path = tmp_path / "app.yaml"
        schema_path.write_text("- users\n- posts\n")

        with pytest.raises(SchemaError) as exc_info:
            load_schema(schema_path)

        assert "Schema root must be a mapping" in str(exc_info.value)


class TestIterTables:
    def test_yields_tables(self):
        schema = {
            "tables": [
                {"name": "users", "columns": [{"name": "id"}]},
                {"name": "posts"},
            ]
        }
        assert [t["name"] for t in iter_tables(schema)] == ["users", "posts"]

    def test_missing_tables(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            list(iter_tables({"schema": "public"}, "app.yaml"))
        assert str(exc_info.value) == "[app.yaml] schema must provide a 'tables' list"

    def test_table_without_name(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            list(iter_tables({"tables": [{"name": "users"}, {"columns": []}]}))
        assert exc_info.value.field == "tables[1]"

    def test_column_without_name(self):
        schema = {"tables": [{"name": "users", "columns": [{"type": "integer"}]}]}
        with pytest.raises(SchemaValidationError) as exc_info:
            list(iter_tables(schema))
        assert exc_info.value.field == "users"


class TestCollectSchemaPaths:
    def test_collect_single_file(self, tmp_path):
        schema_path = tmp_path / "app.yaml"
        schema_path.write_text(USERS_SCHEMA)

        assert collect_schema_paths([schema_path]) == [schema_path.resolve()]

    def test_collect_directory(self, tmp_path):
        (tmp_path / "a.yaml").write_text(USERS_SCHEMA)
        (tmp_path / "b.yml").write_text(USERS_SCHEMA)
        (tmp_path / "c.json").write_text("{}")
        (tmp_path / "notes.txt").write_text("content")

        paths = collect_schema_paths([tmp_path])
        assert paths == [
            (tmp_path / "a.yaml").resolve(),
            (tmp_path / "b.yml").resolve(),
            (tmp_path / "c.json").resolve(),
        ]

    def test_collect_mixed_inputs(self, tmp_path):
        single_file = tmp_path / "single.yaml"
        single_file.write_text(USERS_SCHEMA)

        dir_path = tmp_path / "schemas"
        dir_path.mkdir()
        (dir_path / "app.yaml").write_text(USERS_SCHEMA)

        paths = collect_schema_paths([single_file, dir_path])
        assert paths == [single_file.resolve(), (dir_path / "app.yaml").resolve()]

    def test_collect_nonexistent_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            collect_schema_paths([tmp_path / "nonexistent"])

    def test_collect_deduplicates(self, tmp_path):
        schema_path = tmp_path / "app.yaml"
        schema_path.write_text(USERS_SCHEMA)

        assert collect_schema_paths([schema_path, schema_path]) == [schema_path.resolve()]
