"""Editor configuration, optionally read from `[tool.ioparams]` in pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

_logger = logging.getLogger(__name__)

DEFAULT_EXPRESSION_PLACEHOLDER = "${}"


@dataclass
class EditorConfig:
    """Configuration for parameter editing sessions."""
    strict_wrapping: bool = True
    expression_placeholder: str = DEFAULT_EXPRESSION_PLACEHOLDER

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditorConfig":
        """Create a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name not in known:
                _logger.warning("Ignoring unknown ioparams setting: %s", key)
                continue
            kwargs[name] = value
        return cls(**kwargs)


def find_pyproject(start: Path) -> Path | None:
    """Locate the nearest pyproject.toml at or above `start`."""
    start = start.resolve()
    if start.is_file():
        start = start.parent
    for directory in (start, *start.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Path | None = None) -> EditorConfig:
    """Load EditorConfig from the nearest pyproject.toml.

    Args:
        start: Directory (or file) to search from, defaults to cwd

    Returns:
        The configured EditorConfig, or defaults when nothing is configured
    """
    pyproject_path = find_pyproject(start or Path.cwd())
    if pyproject_path is None:
        return EditorConfig()

    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get("ioparams")
    if not section:
        return EditorConfig()

    _logger.debug("Loaded ioparams settings from %s", pyproject_path)
    return EditorConfig.from_dict(section)
