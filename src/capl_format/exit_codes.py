"""Exit codes of the capl-format CLI.

Code  Meaning
----  -------
  0   Success
  1   Differences found (--list-different only)
  2   One or more files failed to read, format or write
  3   Fatal configuration error, preempts everything else
"""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    DIFFERENCES = 1
    FAILURE = 2
    FATAL = 3


class ExitState:
    """Escalate-only accumulator for the final exit code of a run."""

    def __init__(self):
        self.code = ExitCode.SUCCESS

    def escalate(self, code: ExitCode) -> None:
        if code > self.code:
            self.code = ExitCode(code)
