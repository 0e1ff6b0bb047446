from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

DEFAULT_DEPENDENCY_DIRS = ("node_modules",)


@dataclass(frozen=True)
class RunOptions:
    """Flags controlling one run of the CLI"""

    patterns: Tuple[str, ...] = ()
    write: bool = False
    list_different: bool = False
    ignore_dependency_dirs: bool = True
    dependency_dirs: Tuple[str, ...] = DEFAULT_DEPENDENCY_DIRS
    stdin: bool = False
    debug_check: bool = False
    debug_print_doc: bool = False


@dataclass
class FormatOptions:
    """Options passed through to the formatting engine without interpretation."""

    values: Dict[str, Any] = field(default_factory=dict)

    def for_file(self, filepath: Optional[str]) -> Dict[str, Any]:
        merged = dict(self.values)
        if filepath is not None:
            merged["filepath"] = filepath
        return merged

    @property
    def cursor_requested(self) -> bool:
        return self.values.get("cursor_offset") is not None


def merge_options(*sources: Dict[str, Any]) -> Dict[str, Any]:
    """Merge option dicts left to right, skipping unset (None) values."""
    merged: Dict[str, Any] = {}
    for source in sources:
        merged.update({k: v for k, v in source.items() if v is not None})
    return merged

