"""
Detector Configuration Store.

Settings are read from the ``[tool.styled_detectors]`` table of the nearest
``pyproject.toml`` and overridden by explicit (CLI) arguments::

    [tool.styled_detectors]
    top_level_import_paths = ["@acme/design-system/styled"]
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib


class DetectorConfig(BaseModel):
  """
  Configuration for a detection run.
  """

  top_level_import_paths: List[str] = Field(
    default_factory=list,
    description="Extra module specifiers treated as styled-components (e.g. re-exports).",
  )
  styled_required: Optional[str] = Field(
    None,
    description="Local name bound by require('styled-components'), when no upstream pass records it.",
  )

  @field_validator("top_level_import_paths")
  @classmethod
  def validate_paths(cls, v: List[str]) -> List[str]:
    """
    Strips whitespace and rejects empty specifiers.

    Args:
        v (List[str]): Raw module specifiers.

    Returns:
        List[str]: Cleaned specifiers, duplicates removed, order kept.

    Raises:
        ValueError: If a specifier is blank.
    """
    cleaned = []
    for path in v:
      stripped = path.strip()
      if not stripped:
        raise ValueError("Import paths must be non-empty module specifiers.")
      cleaned.append(stripped)
    return list(dict.fromkeys(cleaned))

  @field_validator("styled_required")
  @classmethod
  def validate_required(cls, v: Optional[str]) -> Optional[str]:
    """
    Ensures the require binding is a plain identifier.

    Raises:
        ValueError: If the name is not a valid identifier.
    """
    if v is None:
      return None
    v_clean = v.strip()
    if not v_clean.replace("$", "_").isidentifier():
      raise ValueError(f"Invalid identifier for require binding: '{v}'")
    return v_clean

  @classmethod
  def load(
    cls,
    top_level_import_paths: Optional[List[str]] = None,
    styled_required: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "DetectorConfig":
    """
    Loads configuration from pyproject.toml and applies overrides.

    Args:
        top_level_import_paths (Optional[List[str]]): Extra paths, merged after
            the ones configured in TOML.
        styled_required (Optional[str]): Override for the require binding.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        DetectorConfig: The fully resolved configuration object.

    Raises:
        ValueError: If the merged settings fail validation.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    final_paths = list(toml_config.get("top_level_import_paths", []))
    final_paths.extend(top_level_import_paths or [])

    final_required = styled_required or toml_config.get("styled_required")

    try:
      return cls(top_level_import_paths=final_paths, styled_required=final_required)
    except ValidationError as e:
      raise ValueError(f"Configuration validation failed: {e}")


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("styled_detectors", {}), parent

  return {}, None
