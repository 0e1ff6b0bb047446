"""Failure kinds raised while formatting a file and how each one is reported."""

import logging
import traceback

import typer
from capl_formatter.errors import CAPLSyntaxError
from pydantic import ValidationError

from .exit_codes import ExitCode, ExitState

logger = logging.getLogger(__name__)


class RunAborted(Exception):
    """Stops the whole run with a fixed exit code."""

    def __init__(self, exit_code: ExitCode, message: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.message = message


class FormatFailure(Exception):
    """Base class for failures of a single input"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        return self.message


class ParseFailure(FormatFailure):
    def __init__(self, message: str, line: int, column: int):
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.message} ({self.line}:{self.column})"


class ValidationFailure(FormatFailure):
    """Invalid formatter options. The same options apply to every file, so this is fatal."""


class IoFailure(FormatFailure):
    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class UnexpectedFailure(FormatFailure):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self._detail = detail

    @property
    def detail(self) -> str:
        return self._detail or self.message


def format_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "options"
        problems.append(f"{location}: {item['msg']}")
    return "Validation Error: " + "; ".join(problems)


def classify(exc: BaseException, path: str = "") -> FormatFailure:
    """Map an exception from the engine or the filesystem to a failure kind."""
    if isinstance(exc, FormatFailure):
        return exc
    if isinstance(exc, CAPLSyntaxError):
        return ParseFailure(exc.message, exc.line, exc.column)
    if isinstance(exc, ValidationError):
        return ValidationFailure(format_validation_error(exc))
    if isinstance(exc, OSError):
        return IoFailure(path, str(exc))
    if exc.__traceback__ is not None:
        detail = "".join(traceback.format_exception(exc)).rstrip()
    else:
        detail = repr(exc)
    return UnexpectedFailure(str(exc) or type(exc).__name__, detail)


def handle_failure(label: str, failure: FormatFailure, exit_state: ExitState) -> None:
    """Report a failure for label and escalate the exit state.

    A validation failure is reported without the label and aborts the run.
    """
    if isinstance(failure, ValidationFailure):
        typer.echo(failure.message, err=True)
        raise RunAborted(ExitCode.FATAL, failure.message)

    if isinstance(failure, ParseFailure):
        typer.echo(f"{label}: {failure}", err=True)
    else:
        typer.echo(f"{label}: {failure.detail}", err=True)
    logger.debug("%s failed with %s", label, type(failure).__name__)
    exit_state.escalate(ExitCode.FAILURE)
