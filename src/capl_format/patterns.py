import glob
import logging
import os
from pathlib import PurePath
from typing import Callable, Iterable, Sequence

import typer

from .exit_codes import ExitCode, ExitState

logger = logging.getLogger(__name__)


class PatternExpander:
    """Turns CLI patterns into file paths"""

    def __init__(self, exit_state: ExitState, ignore_dependency_dirs: bool = True, dependency_dirs: Sequence[str] = ()):
        self.exit_state = exit_state
        self.ignore_dependency_dirs = ignore_dependency_dirs
        self.dependency_dirs = set(dependency_dirs)

    def _has_dependency_dir(self, path: str) -> bool:
        if not self.ignore_dependency_dirs or not self.dependency_dirs:
            return False
        return bool(self.dependency_dirs.intersection(PurePath(path).parts))

    def is_ignored(self, path: str) -> bool:
        """True when path lies under a dependency directory and those are ignored."""
        return self._has_dependency_dir(os.path.abspath(path))

    def expand(self, pattern: str) -> list[str]:
        """Glob a single pattern. Raises OSError or ValueError.

        Only the matched part of the path is checked against dependency
        directories, so running from inside one still finds files.
        """
        matches = glob.glob(pattern, recursive=True, include_hidden=True)
        return sorted(m for m in matches if os.path.isfile(m) and not self._has_dependency_dir(m))

    def each_filename(self, patterns: Iterable[str], callback: Callable[[str], None]) -> None:
        """Invoke callback for every path the patterns resolve to, in pattern order."""
        for pattern in patterns:
            if not glob.has_magic(pattern):
                if self.is_ignored(pattern):
                    logger.debug("Ignoring %s", pattern)
                    continue
                callback(pattern)
                continue

            try:
                filenames = self.expand(pattern)
            except (OSError, ValueError) as e:
                typer.echo(f"Unable to expand glob pattern: {pattern}\n{e}", err=True)
                self.exit_state.escalate(ExitCode.FAILURE)
                continue

            logger.debug("Pattern %s matched %d file(s)", pattern, len(filenames))
            for filename in filenames:
                callback(filename)
