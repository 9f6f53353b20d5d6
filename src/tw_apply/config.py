"""
Runtime Configuration Store.

Options reach the macro either directly from the host (a raw mapping, as the
macro runtime hands it over under the ``twApply`` config name) or from project
files discovered on disk:

- ``pyproject.toml``: ``[tool.tw_apply]``
- ``package.json``: ``{"babelMacros": {"twApply": {...}}}``
- ``.babel-plugin-macrosrc.json``: ``{"twApply": {...}}``
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tw_apply.errors import ConfigurationError

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

logger = logging.getLogger(__name__)

CONFIG_NAME = "twApply"
TOOL_SECTION = "tw_apply"


class MacroConfig(BaseModel):
  """
  Per-invocation options for the macro.
  """

  model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

  file_suffix: str = Field(
    "",
    alias="fileSuffix",
    description="Appended to the stylesheet base name before '.module.css'.",
  )

  @field_validator("file_suffix", mode="before")
  @classmethod
  def validate_file_suffix(cls, v: Any) -> str:
    """
    Accepts strings; falsy values mean no suffix.

    Args:
        v (Any): Raw option value.

    Returns:
        str: The suffix, or an empty string.

    Raises:
        ValueError: If a non-empty value is not a string.
    """
    if not v:
      return ""
    if not isinstance(v, str):
      raise ValueError(f'Config fileSuffix "{v}" is not supported.')
    return v

  @classmethod
  def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "MacroConfig":
    """
    Validates a raw options mapping as supplied by the host.

    Args:
        options (Optional[Mapping]): Raw options, e.g. ``{"fileSuffix": ".local"}``.

    Returns:
        MacroConfig: The validated configuration.

    Raises:
        ConfigurationError: If an option has an unsupported value.
    """
    try:
      return cls.model_validate(dict(options or {}))
    except ValidationError as e:
      raise ConfigurationError(_describe(e)) from e

  @classmethod
  def load(
    cls,
    file_suffix: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "MacroConfig":
    """
    Loads options from project files and overrides them with explicit arguments.

    Args:
        file_suffix (Optional[str]): Override for the stylesheet suffix.
        search_path (Optional[Path]): Directory to start searching from.

    Returns:
        MacroConfig: The fully resolved configuration.
    """
    start_dir = search_path or Path.cwd()
    options, origin = _load_project_settings(start_dir)
    if origin:
      logger.debug(f"Loaded {CONFIG_NAME} options from {origin}")

    options = {_normalize_key(k): v for k, v in options.items()}
    if file_suffix is not None:
      options["fileSuffix"] = file_suffix

    return cls.from_options(options)


def _describe(error: ValidationError) -> str:
  first = error.errors()[0]
  original = first.get("ctx", {}).get("error")
  return str(original) if original else first["msg"]


def _normalize_key(key: str) -> str:
  return "fileSuffix" if key == "file_suffix" else key


def _dig(data: Any, *keys: str) -> Optional[Dict[str, Any]]:
  """Follows ``keys`` through nested tables, giving None at the first level that is not one."""
  for key in keys:
    if not isinstance(data, dict):
      return None
    data = data.get(key)
  return data if isinstance(data, dict) else None


def _read_pyproject(path: Path) -> Optional[Dict[str, Any]]:
  with open(path, "rb") as f:
    data = tomllib.load(f)
  return _dig(data, "tool", TOOL_SECTION)


def _read_package_json(path: Path) -> Optional[Dict[str, Any]]:
  with open(path, "rt", encoding="utf-8") as f:
    data = json.load(f)
  return _dig(data, "babelMacros", CONFIG_NAME)


def _read_macrosrc(path: Path) -> Optional[Dict[str, Any]]:
  with open(path, "rt", encoding="utf-8") as f:
    data = json.load(f)
  return _dig(data, CONFIG_NAME)


_READERS = (
  ("pyproject.toml", _read_pyproject),
  ("package.json", _read_package_json),
  (".babel-plugin-macrosrc.json", _read_macrosrc),
)


def _load_project_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for a file carrying macro options.

  The nearest directory wins; within a directory, files are tried in the
  order pyproject.toml, package.json, .babel-plugin-macrosrc.json.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The options and the file they came from.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    for name, reader in _READERS:
      candidate = parent / name
      if not candidate.is_file():
        continue
      try:
        section = reader(candidate)
      except (OSError, ValueError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring unreadable config file {candidate}: {e}")
        continue
      if isinstance(section, dict):
        return section, candidate

  return {}, None
