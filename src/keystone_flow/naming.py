"""
Identity Name Strategies.

A naming strategy turns the path of a source file into the identity string
written into ``@model("...")``. The default is the path verbatim; the
built-ins below cover the common normalizations. Anything else can be plugged
in as a callable, or referenced by import path (``"package.module:function"``).
"""

import importlib
import posixpath
from typing import Callable, Dict

NamingStrategy = Callable[[str], str]


def raw_path(path: str) -> str:
  """Returns the path unchanged."""
  return path


def posix_path(path: str) -> str:
  """Normalizes Windows separators to forward slashes."""
  return path.replace("\\", "/")


def module_path(path: str) -> str:
  """
  Strips the extension from a posix-normalized path.

  Example:
      ``src\\models\\todo.ts`` -> ``src/models/todo``
  """
  root, _ = posixpath.splitext(posix_path(path))
  return root


def file_stem(path: str) -> str:
  """Returns the file name without directories and extension."""
  return posixpath.basename(module_path(path))


NAMING_STRATEGIES: Dict[str, NamingStrategy] = {
  "raw": raw_path,
  "posix": posix_path,
  "module": module_path,
  "stem": file_stem,
}


def resolve_naming_strategy(name: str) -> NamingStrategy:
  """
  Looks up a naming strategy by name.

  Args:
      name: A key of ``NAMING_STRATEGIES``, or ``"module.path:function"``.

  Returns:
      NamingStrategy: The resolved callable.

  Raises:
      ValueError: If the name is unknown or does not resolve to a callable.
  """
  key = name.strip()
  if key in NAMING_STRATEGIES:
    return NAMING_STRATEGIES[key]

  if ":" not in key:
    raise ValueError(f"Unknown naming strategy: '{key}'. Built-in strategies: {sorted(NAMING_STRATEGIES)}")

  module_name, _, attr = key.partition(":")
  try:
    module = importlib.import_module(module_name)
  except ImportError as e:
    raise ValueError(f"Could not import naming strategy module '{module_name}': {e}")

  strategy = getattr(module, attr, None)
  if not callable(strategy):
    raise ValueError(f"Naming strategy '{key}' is not a callable.")
  return strategy
