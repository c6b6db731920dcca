"""
Tests for TransformOptions and pyproject.toml loading.
"""

import os

import pytest
from pydantic import ValidationError

from keystone_flow.config import TransformOptions
from keystone_flow.naming import file_stem, module_path


def test_defaults():
  options = TransformOptions()
  assert options.target_package_name == "mobx-keystone"
  assert options.identity_name_from_path is None


@pytest.mark.parametrize("value", ["", "   ", None])
def test_blank_package_falls_back_to_default(value):
  assert TransformOptions(target_package_name=value).target_package_name == "mobx-keystone"


def test_package_name_is_stripped():
  assert TransformOptions(target_package_name="  @acme/ks ").target_package_name == "@acme/ks"


def test_camel_case_aliases():
  hook = str.lower
  options = TransformOptions.model_validate({"targetPackageName": "ks", "identityNameFromPath": hook})

  assert options.target_package_name == "ks"
  assert options.identity_name_from_path is hook


def test_strategy_name_is_resolved():
  assert TransformOptions(identity_name_from_path="stem").identity_name_from_path is file_stem
  assert TransformOptions(identity_name_from_path="os.path:basename").identity_name_from_path is os.path.basename


def test_unknown_strategy_is_rejected():
  with pytest.raises(ValidationError):
    TransformOptions(identity_name_from_path="not-a-strategy")


def test_coerce():
  options = TransformOptions(target_package_name="ks")
  assert TransformOptions.coerce(options) is options
  assert TransformOptions.coerce(None) == TransformOptions()
  assert TransformOptions.coerce({"target_package_name": "x"}).target_package_name == "x"


def _write_pyproject(directory, body):
  path = directory / "pyproject.toml"
  path.write_text(body, encoding="utf-8")
  return path


def test_load_reads_tool_section(tmp_path, captured_console):
  _write_pyproject(
    tmp_path,
    '[tool.keystone_flow]\ntarget_package_name = "@acme/ks"\nidentity_name_from_path = "module"\n',
  )

  options = TransformOptions.load(search_path=tmp_path)

  assert options.target_package_name == "@acme/ks"
  assert options.identity_name_from_path is module_path
  assert "keystone_flow" in captured_console.export_text()


def test_load_arguments_override_file(tmp_path):
  _write_pyproject(tmp_path, '[tool.keystone_flow]\ntarget_package_name = "@acme/ks"\n')

  options = TransformOptions.load(target_package_name="other", identity_name_from_path="stem", search_path=tmp_path)

  assert options.target_package_name == "other"
  assert options.identity_name_from_path is file_stem


def test_load_searches_parent_directories(tmp_path):
  _write_pyproject(tmp_path, '[tool.keystone_flow]\ntarget_package_name = "@acme/ks"\n')
  nested = tmp_path / "src" / "models"
  nested.mkdir(parents=True)

  assert TransformOptions.load(search_path=nested).target_package_name == "@acme/ks"


def test_nearest_pyproject_wins_even_without_section(tmp_path):
  _write_pyproject(tmp_path, '[tool.keystone_flow]\ntarget_package_name = "@acme/ks"\n')
  child = tmp_path / "child"
  child.mkdir()
  _write_pyproject(child, '[project]\nname = "child"\n')

  assert TransformOptions.load(search_path=child) == TransformOptions()


def test_unreadable_pyproject_is_ignored(tmp_path):
  _write_pyproject(tmp_path, "[tool.keystone_flow\nbroken")

  assert TransformOptions.load(search_path=tmp_path) == TransformOptions()
