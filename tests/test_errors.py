import pytest
from pydantic import ValidationError

from capl_format.errors import (
    IoFailure,
    ParseFailure,
    RunAborted,
    UnexpectedFailure,
    ValidationFailure,
    classify,
    handle_failure,
)
from capl_format.exit_codes import ExitCode, ExitState
from capl_formatter import CAPLSyntaxError, FormatterConfig


def make_validation_error():
    try:
        FormatterConfig(parser="python")
    except ValidationError as e:
        return e
    raise AssertionError("expected a validation error")


def test_classify_syntax_error():
    failure = classify(CAPLSyntaxError("Unexpected token", 3, 7))
    assert isinstance(failure, ParseFailure)
    assert (failure.line, failure.column) == (3, 7)
    assert str(failure) == "Unexpected token (3:7)"


def test_classify_validation_error():
    failure = classify(make_validation_error())
    assert isinstance(failure, ValidationFailure)
    assert failure.message.startswith("Validation Error: parser:")


def test_classify_os_error():
    failure = classify(FileNotFoundError("gone"), "a.can")
    assert isinstance(failure, IoFailure)
    assert failure.path == "a.can"


def test_classify_unexpected_error_keeps_traceback():
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        failure = classify(e)
    assert isinstance(failure, UnexpectedFailure)
    assert "Traceback" in failure.detail
    assert "boom" in failure.detail


def test_classify_value_without_traceback():
    failure = classify(RuntimeError(["weird", 1]))
    assert isinstance(failure, UnexpectedFailure)
    assert failure.detail == "RuntimeError(['weird', 1])"


def test_classify_passes_failures_through():
    failure = UnexpectedFailure("not stable")
    assert classify(failure) is failure


def test_handle_parse_failure(capsys):
    state = ExitState()
    handle_failure("a.c", ParseFailure("Unexpected token", 1, 5), state)
    assert capsys.readouterr().err == "a.c: Unexpected token (1:5)\n"
    assert state.code == ExitCode.FAILURE


def test_handle_unexpected_failure(capsys):
    state = ExitState()
    handle_failure("a.can", UnexpectedFailure("boom", "Traceback: boom"), state)
    assert capsys.readouterr().err == "a.can: Traceback: boom\n"
    assert state.code == ExitCode.FAILURE


def test_handle_validation_failure_aborts_without_label(capsys):
    state = ExitState()
    with pytest.raises(RunAborted) as exc_info:
        handle_failure("a.can", ValidationFailure("Validation Error: bad"), state)
    assert exc_info.value.exit_code == ExitCode.FATAL
    assert capsys.readouterr().err == "Validation Error: bad\n"
