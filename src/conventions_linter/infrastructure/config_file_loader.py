"""Load [tool.conventions-linter] from pyproject.toml. Infrastructure I/O only."""

import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

from conventions_linter.domain.constants import CONFIG_SECTION


class ConfigFileLoader:
    """
    Loads config from the nearest pyproject.toml.
    """

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Return the [tool.conventions-linter] table of the first pyproject.toml found walking up."""
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = toml_lib.load(f)
            except OSError:
                continue
            tool_section = data.get("tool", {}) or {}
            config_dict = tool_section.get(CONFIG_SECTION, {}) or {}
            return dict(config_dict) if isinstance(config_dict, dict) else empty
        return empty
