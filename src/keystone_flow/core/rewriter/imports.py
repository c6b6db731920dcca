"""
Namespace Import Injection.

Handles the unit-level side of the rewrite:
1.  Reserving a collision-free local name for the target package namespace.
2.  Prepending ``import * as <name> from "<package>";`` to the unit.

A new import is always added rather than reusing an existing import of the
package; the Pass Coordinator drops it again when nothing was rewritten.
"""

from itertools import count
from typing import Set

from keystone_flow.core.nodes import (
  ClassDeclaration,
  FunctionDeclaration,
  FunctionExpression,
  Identifier,
  MethodDeclaration,
  NamespaceImport,
  Node,
  Parameter,
  PropertyDeclaration,
  SourceUnit,
  VariableStatement,
)
from keystone_flow.core.visitor import walk
from keystone_flow.enums import NAMESPACE_HINT

_NAMED_NODES = (
  ClassDeclaration,
  FunctionDeclaration,
  FunctionExpression,
  MethodDeclaration,
  Parameter,
  PropertyDeclaration,
  VariableStatement,
)


def collect_names(root: Node) -> Set[str]:
  """
  Gathers every identifier and declared name used under ``root``.

  Args:
      root: Subtree to scan.

  Returns:
      Set[str]: Names that a generated identifier must not shadow.
  """
  names: Set[str] = set()
  for node in walk(root):
    if isinstance(node, Identifier):
      names.add(node.text)
    elif isinstance(node, _NAMED_NODES) and node.name:
      names.add(node.name)
  return names


def reserve_namespace_identifier(unit: SourceUnit, preferred: str = NAMESPACE_HINT) -> Identifier:
  """
  Reserves the unit-scoped identifier for the namespace import.

  The preferred name is used when it is free; otherwise ``preferred_1``,
  ``preferred_2``, ... are tried in order.

  Args:
      unit: The unit the identifier will be injected into.
      preferred: Base name.

  Returns:
      Identifier: A name unused anywhere in ``unit``.
  """
  taken = collect_names(unit)
  if preferred not in taken:
    return Identifier(text=preferred)

  for suffix in count(1):
    candidate = f"{preferred}_{suffix}"
    if candidate not in taken:
      return Identifier(text=candidate)


def inject_namespace_import(unit: SourceUnit, package: str, binding: Identifier) -> SourceUnit:
  """
  Prepends a namespace import ahead of all top-level statements.

  Unit metadata (declaration flag, references) is preserved.

  Args:
      unit: Original unit (left untouched).
      package: Module specifier of the target package.
      binding: Identifier to bind the namespace to.

  Returns:
      SourceUnit: A new unit with the import first.
  """
  statement = NamespaceImport(binding=binding, module_specifier=package)
  return unit.with_changes(statements=(statement,) + unit.statements)
