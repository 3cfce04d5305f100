from unittest.mock import patch

from codegen_tools import __main__


class TestCmdFunctions:
    @patch("codegen_tools.model_codegen.main")
    def test_cmd_models_success(self, mock_main):
        result = __main__.cmd_models(["schemas/"])
        assert result == 0
        mock_main.assert_called_once_with(["schemas/"])

    @patch("codegen_tools.model_codegen.main")
    def test_cmd_models_failure(self, mock_main):
        mock_main.side_effect = SystemExit(2)
        result = __main__.cmd_models([])
        assert result == 2

    @patch("codegen_tools.model_codegen.main")
    def test_cmd_models_error_message(self, mock_main, capsys):
        mock_main.side_effect = SystemExit("Error: naming configuration is missing")
        result = __main__.cmd_models([])
        assert result == 1
        assert "naming configuration is missing" in capsys.readouterr().err

    @patch("codegen_tools.dbml_export.main")
    def test_cmd_dbml_success(self, mock_main):
        result = __main__.cmd_dbml(["schemas/", "--dry-run"])
        assert result == 0
        mock_main.assert_called_once_with(["schemas/", "--dry-run"])

    @patch("codegen_tools.dbml_export.main")
    def test_cmd_dbml_failure(self, mock_main):
        mock_main.side_effect = SystemExit(1)
        result = __main__.cmd_dbml([])
        assert result == 1

    @patch("codegen_tools.dbml_export.main")
    def test_clean_exit(self, mock_main):
        mock_main.side_effect = SystemExit(None)
        assert __main__.cmd_dbml([]) == 0


class TestMain:
    def test_main_help(self):
        with patch("sys.argv", ["codegen_tools"]), patch("builtins.print") as mock_print:
            result = __main__.main()
            assert result == 0
            mock_print.assert_called()

    def test_main_help_flag(self, capsys):
        assert __main__.main(["--help"]) == 0
        out = capsys.readouterr().out
        assert "models" in out
        assert "dbml" in out

    def test_main_unknown_command(self, capsys):
        result = __main__.main(["unknown"])
        assert result == 1
        assert "Unknown command: unknown" in capsys.readouterr().out

    @patch("codegen_tools.model_codegen.main")
    def test_main_valid_command(self, mock_main):
        with patch("sys.argv", ["codegen_tools", "models", "schemas/", "--dry-run"]):
            result = __main__.main()
        assert result == 0
        mock_main.assert_called_once_with(["schemas/", "--dry-run"])
