"""Command-line driver for the CAPL formatter."""

from .exit_codes import ExitCode, ExitState
from .options import FormatOptions, RunOptions
from .runner import RunController

__all__ = ["ExitCode", "ExitState", "FormatOptions", "RunOptions", "RunController"]
