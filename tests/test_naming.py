"""
Tests for identity name strategies.
"""

import os

import pytest

from keystone_flow.naming import (
  NAMING_STRATEGIES,
  file_stem,
  module_path,
  posix_path,
  raw_path,
  resolve_naming_strategy,
)


@pytest.mark.parametrize(
  "strategy, path, expected",
  [
    (raw_path, "src\\models\\Todo.ts", "src\\models\\Todo.ts"),
    (posix_path, "src\\models\\Todo.ts", "src/models/Todo.ts"),
    (module_path, "src\\models\\Todo.ts", "src/models/Todo"),
    (module_path, "src/models/todo.store.ts", "src/models/todo.store"),
    (file_stem, "src/models/Todo.ts", "Todo"),
    (file_stem, "Todo", "Todo"),
  ],
)
def test_builtin_strategies(strategy, path, expected):
  assert strategy(path) == expected


def test_builtins_resolve_by_name():
  for name, strategy in NAMING_STRATEGIES.items():
    assert resolve_naming_strategy(f" {name} ") is strategy


def test_import_path_resolution():
  assert resolve_naming_strategy("os.path:basename") is os.path.basename


@pytest.mark.parametrize(
  "name, message",
  [
    ("nope", "Unknown naming strategy"),
    ("keystone_flow_missing_module:fn", "Could not import"),
    ("os.path:does_not_exist", "is not a callable"),
    ("os:sep", "is not a callable"),
  ],
)
def test_resolution_errors(name, message):
  with pytest.raises(ValueError, match=message):
    resolve_naming_strategy(name)
