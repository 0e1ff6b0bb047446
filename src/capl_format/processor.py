import logging
import time
from enum import Enum
from pathlib import Path

import typer

from .adapter import ContentFormatter
from .errors import FormatFailure, handle_failure
from .exit_codes import ExitCode, ExitState
from .options import FormatOptions, RunOptions

logger = logging.getLogger(__name__)


class FileOutcome(str, Enum):
    """What happened to one input; logged at debug level by the runner."""

    UNCHANGED = "unchanged"
    WRITTEN = "changed-and-written"
    REPORTED = "changed-and-reported"
    FORMATTED = "formatted"
    CHECKED = "checked"
    READ_ERROR = "read-error"
    FORMAT_ERROR = "format-error"
    WRITE_ERROR = "write-error"


def write_output(text: str, cursor_offset: int, cursor_requested: bool) -> None:
    typer.echo(text, nl=False)
    if cursor_requested:
        typer.echo(str(cursor_offset), err=True)


class FileProcessor:
    """Processes one file at a time: read, check, format, then write or print."""

    def __init__(
        self,
        run_options: RunOptions,
        format_options: FormatOptions,
        exit_state: ExitState,
        formatter: ContentFormatter | None = None,
    ):
        self.run_options = run_options
        self.format_options = format_options
        self.exit_state = exit_state
        self.formatter = formatter or ContentFormatter(
            debug_check=run_options.debug_check, debug_print_doc=run_options.debug_print_doc
        )

    def process(self, filename: str) -> FileOutcome:
        write = self.run_options.write
        list_different = self.run_options.list_different
        path = Path(filename)

        try:
            with open(path, encoding="utf-8", newline="") as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as e:
            typer.echo(f"Unable to read file: {filename}\n{e}", err=True)
            self.exit_state.escalate(ExitCode.FAILURE)
            return FileOutcome.READ_ERROR

        options = self.format_options.for_file(filename)
        try:
            if list_different and not self.formatter.check(source, options):
                if not write:
                    typer.echo(filename)
                self.exit_state.escalate(ExitCode.DIFFERENCES)
            start = time.perf_counter()
            result = self.formatter.format(source, options)
        except FormatFailure as failure:
            handle_failure(filename, failure, self.exit_state)
            return FileOutcome.FORMAT_ERROR
        output = result.formatted
        logger.debug("Formatted %s in %.1fms", filename, (time.perf_counter() - start) * 1000)

        if write:
            elapsed = f"{filename} {(time.perf_counter() - start) * 1000:.0f}ms"
            # Leave unchanged files alone so mtime based caches stay valid
            if output == source:
                if not list_different:
                    typer.secho(elapsed, fg="bright_black")
                return FileOutcome.UNCHANGED

            typer.echo(filename if list_different else elapsed)
            try:
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(output)
            except OSError as e:
                typer.echo(f"Unable to write file: {filename}\n{e}", err=True)
                self.exit_state.escalate(ExitCode.FAILURE)
                return FileOutcome.WRITE_ERROR
            return FileOutcome.WRITTEN

        if self.run_options.debug_check:
            if output:
                typer.echo(output)
                return FileOutcome.CHECKED
            self.exit_state.escalate(ExitCode.FAILURE)
            return FileOutcome.FORMAT_ERROR

        if list_different:
            return FileOutcome.UNCHANGED if output == source else FileOutcome.REPORTED

        write_output(output, result.cursor_offset, self.format_options.cursor_requested)
        return FileOutcome.FORMATTED

    def process_source(self, source: str, label: str = "stdin") -> FileOutcome:
        """Format text that did not come from a file and print the result."""
        options = self.format_options.for_file(None)
        try:
            result = self.formatter.format(source, options)
        except FormatFailure as failure:
            handle_failure(label, failure, self.exit_state)
            return FileOutcome.FORMAT_ERROR
        write_output(result.formatted, result.cursor_offset, self.format_options.cursor_requested)
        return FileOutcome.FORMATTED
