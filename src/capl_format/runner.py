import logging
import sys
from typing import TextIO

import typer

from .errors import RunAborted
from .exit_codes import ExitCode, ExitState
from .options import FormatOptions, RunOptions
from .patterns import PatternExpander
from .processor import FileProcessor

logger = logging.getLogger(__name__)


class RunController:
    """Top-level orchestration of one capl-format invocation"""

    def __init__(self, run_options: RunOptions, format_options: FormatOptions):
        self.run_options = run_options
        self.format_options = format_options
        self.exit_state = ExitState()

    def validate(self) -> None:
        if self.run_options.write and self.run_options.debug_check:
            self._abort("Cannot use --write and --debug-check together.")
        if self.run_options.write and self.run_options.debug_print_doc:
            self._abort("Cannot use --write and --debug-print-doc together.")

    def run(self, stdin: TextIO | None = None) -> ExitCode:
        """Process stdin or every file the patterns resolve to. Raises RunAborted."""
        self.validate()
        processor = FileProcessor(self.run_options, self.format_options, self.exit_state)

        if self.run_options.stdin:
            try:
                source = (stdin or sys.stdin).read()
            except (OSError, UnicodeDecodeError) as e:
                typer.echo(f"Unable to read file: stdin\n{e}", err=True)
                self.exit_state.escalate(ExitCode.FAILURE)
                return self.exit_state.code
            processor.process_source(source)
            return self.exit_state.code

        expander = PatternExpander(
            self.exit_state,
            ignore_dependency_dirs=self.run_options.ignore_dependency_dirs,
            dependency_dirs=self.run_options.dependency_dirs,
        )

        def handle_file(filename: str) -> None:
            outcome = processor.process(filename)
            logger.debug("%s: %s", filename, outcome.value)

        expander.each_filename(self.run_options.patterns, handle_file)
        return self.exit_state.code

    @staticmethod
    def _abort(message: str) -> None:
        typer.echo(message, err=True)
        raise RunAborted(ExitCode.FATAL, message)
