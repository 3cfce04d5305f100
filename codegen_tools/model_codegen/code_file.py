"""Generated files that are either written to disk or previewed as a diff."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TextIO

from ..shared.console import diff_chars, draw_table, render_diff
from ..shared.errors import ArtifactError


class ArtifactState(Enum):
    PENDING = "pending"
    PREVIEWED = "previewed"
    WRITTEN = "written"


class CodeFile:
    """A file to be produced by a generator.

    With ``dry_run`` set, :meth:`save` only prints a character diff against
    the file currently on disk and never touches the file system.
    """

    __slots__ = ("path", "content", "dry_run", "state", "_stream")

    def __init__(
        self,
        path: Path | str,
        content: str,
        *,
        dry_run: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self.path = Path(path)
        self.content = content
        self.dry_run = dry_run
        self.state = ArtifactState.PENDING
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def read_existing_file(self) -> str:
        """Return the text currently at the path, or the candidate content.

        Falling back to the candidate content makes a file that does not
        exist yet diff as "no changes".

        Raises:
            ArtifactError: If the existing file cannot be read.
        """
        if not self.path.exists():
            return self.content
        try:
            with self.path.open(encoding="utf-8", newline="") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ArtifactError(str(e), str(self.path), "read") from e

    def preview(self) -> None:
        """Print a bordered header and the colourised diff for this file."""
        parts = diff_chars(self.read_existing_file(), self.content)
        draw_table(f"File: {self.path}", self.stream)
        print(render_diff(parts), file=self.stream)

    diff = preview

    def save(self) -> None:
        """Write the file, or preview it when running dry.

        Raises:
            ArtifactError: If the artifact was already saved or the write fails.
        """
        if self.state is not ArtifactState.PENDING:
            raise ArtifactError(
                f"artifact already {self.state.value}", str(self.path), "save"
            )

        if self.dry_run:
            self.preview()
            self.state = ArtifactState.PREVIEWED
            return

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(self.content)
        except OSError as e:
            raise ArtifactError(str(e), str(self.path), "write") from e
        self.state = ArtifactState.WRITTEN


@dataclass
class GenerationSummary:
    """Outcome of materializing a batch of files."""

    written: list[Path] = field(default_factory=list)
    previewed: list[Path] = field(default_factory=list)
    failed: list[ArtifactError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def materialize(code_file: CodeFile, summary: GenerationSummary) -> None:
    """Save one file; a failure is reported on stderr and recorded, not raised."""
    try:
        code_file.save()
    except ArtifactError as e:
        print(f"Error: {e}", file=sys.stderr)
        summary.failed.append(e)
        return

    if code_file.state is ArtifactState.PREVIEWED:
        summary.previewed.append(code_file.path)
    else:
        summary.written.append(code_file.path)
