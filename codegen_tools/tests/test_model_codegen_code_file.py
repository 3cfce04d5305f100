import io

import pytest

from codegen_tools.model_codegen.code_file import (
    ArtifactState,
    CodeFile,
    GenerationSummary,
    materialize,
)
from codegen_tools.shared.console import ANSI_GREEN, ANSI_RED
from codegen_tools.shared.errors import ArtifactError

CONTENT = "export class User {}\n"


class TestCodeFileDryRun:
    def test_never_creates_the_file(self, tmp_path):
        path = tmp_path / "models" / "User.ts"
        out = io.StringIO()

        CodeFile(path, CONTENT, dry_run=True, stream=out).save()

        assert not path.exists()
        assert not path.parent.exists()

    def test_new_file_shows_no_additions(self, tmp_path):
        path = tmp_path / "User.ts"
        out = io.StringIO()
        code_file = CodeFile(path, CONTENT, dry_run=True, stream=out)

        code_file.save()

        output = out.getvalue()
        assert f"File: {path}" in output
        assert CONTENT in output
        assert ANSI_GREEN not in output
        assert ANSI_RED not in output
        assert code_file.state is ArtifactState.PREVIEWED

    def test_existing_file_shows_changes_and_is_untouched(self, tmp_path):
        path = tmp_path / "User.ts"
        path.write_text("export class Account {}\n")
        out = io.StringIO()

        CodeFile(path, CONTENT, dry_run=True, stream=out).save()

        output = out.getvalue()
        assert ANSI_RED in output
        assert ANSI_GREEN in output
        assert path.read_text() == "export class Account {}\n"

    def test_diff_is_preview(self, tmp_path):
        out = io.StringIO()
        code_file = CodeFile(tmp_path / "User.ts", CONTENT, stream=out)
        code_file.diff()
        assert "File:" in out.getvalue()
        assert code_file.state is ArtifactState.PENDING


class TestCodeFileWrite:
    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "src" / "models" / "User.ts"
        code_file = CodeFile(path, CONTENT)

        code_file.save()

        assert path.read_text(encoding="utf-8") == CONTENT
        assert code_file.state is ArtifactState.WRITTEN

    def test_content_written_verbatim(self, tmp_path):
        path = tmp_path / "User.ts"
        content = "line one\r\nline two\n"

        CodeFile(path, content).save()

        assert path.read_bytes() == content.encode("utf-8")

    def test_overwrites_existing(self, tmp_path):
        path = tmp_path / "User.ts"
        path.write_text("old")

        CodeFile(path, CONTENT).save()

        assert path.read_text() == CONTENT

    def test_save_twice(self, tmp_path):
        code_file = CodeFile(tmp_path / "User.ts", CONTENT)
        code_file.save()

        with pytest.raises(ArtifactError) as exc_info:
            code_file.save()
        assert "already written" in str(exc_info.value)

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(ArtifactError) as exc_info:
            CodeFile(blocker / "User.ts", CONTENT).save()
        assert exc_info.value.operation == "write"


class TestReadExistingFile:
    def test_missing_returns_content(self, tmp_path):
        assert CodeFile(tmp_path / "User.ts", CONTENT).read_existing_file() == CONTENT

    def test_existing_returns_disk_text(self, tmp_path):
        path = tmp_path / "User.ts"
        path.write_text("on disk\n")
        assert CodeFile(path, CONTENT).read_existing_file() == "on disk\n"

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "User.ts"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(ArtifactError) as exc_info:
            CodeFile(path, CONTENT).read_existing_file()
        assert exc_info.value.operation == "read"


class TestMaterialize:
    def test_records_written_and_previewed(self, tmp_path):
        summary = GenerationSummary()
        materialize(CodeFile(tmp_path / "A.ts", CONTENT), summary)
        materialize(
            CodeFile(tmp_path / "B.ts", CONTENT, dry_run=True, stream=io.StringIO()),
            summary,
        )

        assert summary.written == [tmp_path / "A.ts"]
        assert summary.previewed == [tmp_path / "B.ts"]
        assert summary.ok

    def test_failure_is_reported_not_raised(self, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        summary = GenerationSummary()

        materialize(CodeFile(blocker / "A.ts", CONTENT), summary)

        assert not summary.ok
        assert len(summary.failed) == 1
        assert "Error: Failed to write" in capsys.readouterr().err
