from codegen_tools.shared.errors import (
    ArtifactError,
    ConfigurationError,
    SchemaError,
    SchemaValidationError,
)


class TestSchemaError:
    def test_init_no_path(self):
        error = SchemaError("unreadable schema")
        assert str(error) == "unreadable schema"
        assert error.schema_path is None

    def test_init_with_path(self):
        error = SchemaError("unreadable schema", "schemas/app.yaml")
        assert str(error) == "[schemas/app.yaml] unreadable schema"
        assert error.schema_path == "schemas/app.yaml"


class TestSchemaValidationError:
    def test_init_no_field_no_path(self):
        error = SchemaValidationError("tables missing")
        assert str(error) == "tables missing"
        assert error.field is None
        assert error.schema_path is None

    def test_init_with_field_and_path(self):
        error = SchemaValidationError("needs a name", "app.yaml", "tables[0]")
        assert str(error) == "[app.yaml] Field 'tables[0]': needs a name"
        assert error.field == "tables[0]"
        assert isinstance(error, SchemaError)


class TestConfigurationError:
    def test_message_only(self):
        error = ConfigurationError("naming configuration is missing")
        assert str(error) == "naming configuration is missing"
        assert error.config_path is None
        assert error.key is None

    def test_with_key(self):
        error = ConfigurationError("is missing", key="generator.model.naming")
        assert str(error) == "Key 'generator.model.naming': is missing"
        assert error.key == "generator.model.naming"

    def test_with_path_and_key(self):
        error = ConfigurationError("bad value", "codegen.yaml", "dry_run")
        assert str(error) == "[codegen.yaml] Key 'dry_run': bad value"
        assert error.config_path == "codegen.yaml"

    def test_not_a_schema_error(self):
        assert not isinstance(ConfigurationError("x"), SchemaError)


class TestArtifactError:
    def test_init(self):
        error = ArtifactError("Permission denied", "models/User.ts", "write")
        assert str(error) == "Failed to write 'models/User.ts': Permission denied"
        assert error.path == "models/User.ts"
        assert error.operation == "write"
