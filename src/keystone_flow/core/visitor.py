"""
Generic Tree Traversal.

Provides the substrate every rewriter runs on:

1.  ``visit_each_child``: rebuilds a node from the results of applying a
    visitor callback to each of its direct children. Nodes whose children all
    come back unchanged are returned as-is, so a traversal that matches
    nothing hands back the very same tree.
2.  ``walk``: read-only depth-first iteration over a subtree.
3.  ``is_function_like``: the boundary predicate used to stop rewrites from
    leaking into nested function bodies.
"""

from dataclasses import fields
from typing import Any, Callable, Dict, Iterator

from keystone_flow.core.nodes import (
  FunctionDeclaration,
  FunctionValue,
  MethodDeclaration,
  Node,
  NodeT,
)

Visitor = Callable[[Node], Node]


def _visit_value(value: Any, visitor: Visitor) -> Any:
  if isinstance(value, Node):
    return visitor(value)

  if isinstance(value, tuple):
    updated = tuple(visitor(item) if isinstance(item, Node) else item for item in value)
    if all(new is old for new, old in zip(updated, value)):
      return value
    return updated

  return value


def visit_each_child(node: NodeT, visitor: Visitor) -> NodeT:
  """
  Applies ``visitor`` to every direct child of ``node``.

  Children are node-valued fields and node elements of tuple fields, visited
  in declaration order. Non-node fields (names, flags, keywords) are carried
  over untouched.

  Args:
      node: The parent node.
      visitor: Callback returning the replacement for a child.

  Returns:
      The original ``node`` if no child changed identity, otherwise a new node
      sharing every unchanged child.
  """
  changes: Dict[str, Any] = {}

  for f in fields(node):
    value = getattr(node, f.name)
    updated = _visit_value(value, visitor)
    if updated is not value:
      changes[f.name] = updated

  if not changes:
    return node
  return node.with_changes(**changes)


def iter_children(node: Node) -> Iterator[Node]:
  """Yields the direct children of ``node`` in declaration order."""
  for f in fields(node):
    value = getattr(node, f.name)
    if isinstance(value, Node):
      yield value
    elif isinstance(value, tuple):
      for item in value:
        if isinstance(item, Node):
          yield item


def walk(node: Node) -> Iterator[Node]:
  """
  Iterates over ``node`` and all its descendants, depth-first, pre-order.

  Args:
      node: Root of the subtree.

  Yields:
      Node: Each node in the subtree.
  """
  stack = [node]
  while stack:
    current = stack.pop()
    yield current
    stack.extend(reversed(list(iter_children(current))))


def is_function_like(node: Node) -> bool:
  """
  Checks whether a node introduces its own function body.

  Suspension points inside such a node belong to that function, not to an
  enclosing coroutine being converted.
  """
  return isinstance(node, (FunctionValue, FunctionDeclaration, MethodDeclaration))
