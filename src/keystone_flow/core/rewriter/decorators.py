"""
Decorator Matching and Normalization.

Decorators are matched by the structure of their expression, never by their
rendered text. Triggers must be a bare identifier with the exact name, so
``@autoFlowLater``, ``@lib.autoFlow`` and ``@autoFlow()`` are not triggers.

The presence check for an already-applied flow decorator is looser: it
compares the terminal identifier of the expression, so ``@modelFlow`` and
``@mobxKs.modelFlow`` both count:

    @autoFlow              -> "autoFlow"
    @autoFlow()            -> "autoFlow"
    @mobxKs.modelFlow      -> "modelFlow"
    @mobxKs.model("Todo")  -> "model"

This module also hosts the Annotation Normalizer applied to every converted
property.
"""

from typing import Iterable, List, Optional, Tuple

from keystone_flow.core.nodes import Call, Decorator, Identifier, Modifier, ModifierLike, Node, PropertyAccess
from keystone_flow.enums import ModifierKeyword, TriggerName


def expression_name(expr: Node) -> Optional[str]:
  """Resolves the terminal name of an identifier, property access or call."""
  if isinstance(expr, Identifier):
    return expr.text
  if isinstance(expr, PropertyAccess):
    return expr.name
  if isinstance(expr, Call):
    return expression_name(expr.callee)
  return None


def decorator_name(decorator: Decorator) -> Optional[str]:
  return expression_name(decorator.expression)


def is_specific_decorator(modifier: Node, name: str) -> bool:
  """Checks if ``modifier`` is ``@name``, a bare identifier with exactly that name."""
  return (
    isinstance(modifier, Decorator)
    and isinstance(modifier.expression, Identifier)
    and modifier.expression.text == name
  )


def find_decorator(modifiers: Iterable[ModifierLike], name: str) -> Optional[Decorator]:
  for modifier in modifiers:
    if is_specific_decorator(modifier, name):
      return modifier
  return None


def has_decorator(modifiers: Iterable[ModifierLike], name: str) -> bool:
  return find_decorator(modifiers, name) is not None


def has_decorator_named(modifiers: Iterable[ModifierLike], name: Optional[str]) -> bool:
  """Checks for any decorator whose terminal name is ``name``."""
  return any(isinstance(m, Decorator) and decorator_name(m) == name for m in modifiers)


def is_async_modifier(modifier: Node) -> bool:
  return isinstance(modifier, Modifier) and modifier.keyword == ModifierKeyword.ASYNC


def normalize_flow_decorators(
  modifiers: Iterable[ModifierLike],
  flow_decorator: Decorator,
  trigger: str = TriggerName.FLOW.value,
) -> Tuple[ModifierLike, ...]:
  """
  Ensures the flow decorator is present and the trigger and ``async`` are gone.

  1. Drops the ``async`` modifier.
  2. Drops the bare ``@trigger`` decorator.
  3. Inserts ``flow_decorator`` first, unless a decorator with the same name is
     already present.

  Running it on its own output returns an equal tuple. Order relative to other
  unrelated decorators is not adjusted beyond placing the new one first.

  Args:
      modifiers: Existing decorators and modifiers of the declaration.
      flow_decorator: The target flow decorator (e.g. ``@mobxKs.modelFlow``).
      trigger: Name of the trigger decorator to strip.

  Returns:
      Tuple[ModifierLike, ...]: The normalized modifier list.
  """
  kept: List[ModifierLike] = [
    m for m in modifiers if not is_async_modifier(m) and not is_specific_decorator(m, trigger)
  ]

  if not has_decorator_named(kept, decorator_name(flow_decorator)):
    # TODO: resolve ordering conflicts with decorators that must stay outermost
    kept.insert(0, flow_decorator)

  return tuple(kept)
