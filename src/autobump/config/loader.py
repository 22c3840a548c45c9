"""Loading configuration from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from autobump.config.models import AutobumpConfig
from autobump.exceptions import ConfigNotFoundError, ConfigValidationError
from autobump.logging import get_logger

logger = get_logger(__name__)

TOOL_NAME = "autobump"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in the start directory or one of its parents.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}", details=str(e)) from e


def extract_autobump_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.autobump]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None) -> AutobumpConfig:
    """Load autobump configuration for the project at path.

    Defaults are used when pyproject.toml has no ``[tool.autobump]`` table.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If configuration values are invalid
    """
    pyproject_path = find_pyproject_toml(path)
    raw = extract_autobump_config(load_pyproject_toml(pyproject_path))

    try:
        config = AutobumpConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid [tool.{TOOL_NAME}] configuration in {pyproject_path}",
            details=str(e),
        ) from e

    logger.debug("config_loaded", path=str(pyproject_path), has_tool_table=bool(raw))
    return config


def get_project_name(path: Path | None = None) -> str:
    """Get [project].name from pyproject.toml.

    Raises:
        ConfigValidationError: If the name is missing
    """
    pyproject_path = find_pyproject_toml(path)
    name = load_pyproject_toml(pyproject_path).get("project", {}).get("name")
    if not isinstance(name, str) or not name:
        raise ConfigValidationError(f"Missing [project].name in {pyproject_path}")
    return name
