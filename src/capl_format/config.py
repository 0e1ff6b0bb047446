import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Tuple

from .options import DEFAULT_DEPENDENCY_DIRS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path(".capl-format.toml")
CONFIG_SECTION = "capl-format"


class ConfigError(Exception):
    """The configuration file exists but cannot be used"""


class FormatConfig:
    """Handles loading of .capl-format.toml configuration"""

    def __init__(self, config_path: Path | None = None):
        self.options: Dict[str, Any] = {}
        self.ignore_dirs: Tuple[str, ...] = DEFAULT_DEPENDENCY_DIRS

        if config_path and config_path.exists():
            self._load_from_file(config_path)

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Unable to load config file {path}: {e}") from e

        # Either a [tool.capl-format] table or plain top level keys
        tool_section = data.get("tool", {}).get(CONFIG_SECTION)
        if tool_section is not None:
            section = dict(tool_section)
        elif path.name == "pyproject.toml":
            section = {}
        else:
            section = {k: v for k, v in data.items() if k != "tool"}

        ignore_dirs = section.pop("ignore_dirs", None)
        if ignore_dirs is not None:
            if not isinstance(ignore_dirs, list) or not all(isinstance(d, str) for d in ignore_dirs):
                raise ConfigError(f"{path}: ignore_dirs must be a list of directory names")
            self.ignore_dirs = tuple(ignore_dirs)

        self.options = {k.replace("-", "_"): v for k, v in section.items()}
        logger.debug("Loaded %d option(s) from %s", len(self.options), path)
