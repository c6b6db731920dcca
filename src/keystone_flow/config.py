"""
Transform Configuration.

Holds the options recognized by the transformer factory and loads project
defaults from the ``[tool.keystone_flow]`` table of ``pyproject.toml``.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from keystone_flow.enums import DEFAULT_TARGET_PACKAGE
from keystone_flow.naming import resolve_naming_strategy
from keystone_flow.utils.console import log_info

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

logger = logging.getLogger(__name__)

TOOL_SECTION = "keystone_flow"


class TransformOptions(BaseModel):
  """
  Options for one transformer factory.

  Field aliases accept the camelCase spelling used by build-tool configs
  (``targetPackageName``, ``identityNameFromPath``).
  """

  model_config = ConfigDict(populate_by_name=True)

  target_package_name: str = Field(
    DEFAULT_TARGET_PACKAGE,
    alias="targetPackageName",
    description="Module specifier used in the injected namespace import.",
  )
  identity_name_from_path: Optional[Callable[[str], str]] = Field(
    None,
    alias="identityNameFromPath",
    description="Derives a class identity from the file path. Defaults to the raw path.",
  )

  @field_validator("target_package_name", mode="before")
  @classmethod
  def validate_package_name(cls, v: Any) -> str:
    """
    Normalizes the package name; blank values fall back to the default.

    Args:
        v: Raw value.

    Returns:
        str: The stripped package name, or ``"mobx-keystone"`` if blank.
    """
    if v is None:
      return DEFAULT_TARGET_PACKAGE
    v_clean = str(v).strip()
    return v_clean or DEFAULT_TARGET_PACKAGE

  @field_validator("identity_name_from_path", mode="before")
  @classmethod
  def resolve_identity_strategy(cls, v: Any) -> Any:
    """
    Resolves strategy names (``"stem"``, ``"pkg.mod:func"``) to callables.

    Raises:
        ValueError: If a strategy name cannot be resolved.
    """
    if isinstance(v, str):
      return resolve_naming_strategy(v)
    return v

  @classmethod
  def coerce(cls, options: Union["TransformOptions", Dict[str, Any], None]) -> "TransformOptions":
    """
    Accepts an options object, a plain mapping, or ``None``.

    Returns:
        TransformOptions: A validated options instance.
    """
    if options is None:
      return cls()
    if isinstance(options, cls):
      return options
    return cls.model_validate(options)

  @classmethod
  def load(
    cls,
    target_package_name: Optional[str] = None,
    identity_name_from_path: Optional[Union[str, Callable[[str], str]]] = None,
    search_path: Optional[Path] = None,
  ) -> "TransformOptions":
    """
    Loads options from pyproject.toml and overrides them with explicit arguments.

    Args:
        target_package_name: Override for the target package.
        identity_name_from_path: Override for the naming hook (callable or strategy name).
        search_path: Directory to start searching for ``pyproject.toml``.

    Returns:
        TransformOptions: The resolved options.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)
    if toml_dir and toml_config:
      log_info(f"Loaded [code]{TOOL_SECTION}[/code] settings from [path]{toml_dir}[/path]")

    final_package = target_package_name or toml_config.get("target_package_name")
    final_naming = identity_name_from_path or toml_config.get("identity_name_from_path")

    return cls(
      target_package_name=final_package,
      identity_name_from_path=final_naming,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for 'pyproject.toml' and extracts config.

  The nearest ``pyproject.toml`` wins, whether or not it has a
  ``[tool.keystone_flow]`` table.

  Args:
      start_path: Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable %s: %s", toml_path, e)
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(TOOL_SECTION, {}), parent

  return {}, None
