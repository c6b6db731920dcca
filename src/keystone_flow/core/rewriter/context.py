"""
Rewriter Context Module.

This module provides the `TransformContext` container, which holds all state
for a single invocation of the pass over one source unit: the generated
namespace identifier, the target expressions rooted at it, and the mutable
accumulators (rewritten flag, pending properties, class scope stack).

A fresh context is created per unit. Nothing here is shared between
invocations, which keeps concurrent transforms independent.
"""

from typing import Callable, List, Optional, Set

from keystone_flow.core.capabilities import HostContext
from keystone_flow.core.nodes import Decorator, Expression, Identifier, PropertyAccess
from keystone_flow.enums import TargetName


def namespace_member(namespace: Identifier, name: str) -> PropertyAccess:
  """Builds ``<namespace>.<name>``."""
  return PropertyAccess(expression=namespace, name=name)


class TransformContext:
  """
  Per-invocation state for the Pass Coordinator.
  """

  def __init__(
    self,
    namespace: Identifier,
    file_name: str,
    host: HostContext,
    identity_name_from_path: Optional[Callable[[str], str]] = None,
  ):
    """
    Initializes the context and the fixed target expressions.

    Args:
        namespace: The generated identifier bound to the namespace import.
        file_name: Path of the unit being transformed.
        host: Capabilities of the invoking compilation context.
        identity_name_from_path: Optional hook deriving a class identity from ``file_name``.
    """
    self.namespace = namespace
    self.file_name = file_name
    self.host = host
    self.identity_name_from_path = identity_name_from_path

    # -- Target expressions --
    self.async_adapter: Expression = namespace_member(namespace, TargetName.ASYNC_ADAPTER.value)
    self.await_adapter: Expression = namespace_member(namespace, TargetName.AWAIT_ADAPTER.value)
    self.flow_decorator = Decorator(expression=namespace_member(namespace, TargetName.FLOW_DECORATOR.value))
    self.identity_expression: Expression = namespace_member(namespace, TargetName.IDENTITY_DECORATOR.value)

    # -- Core State --
    self.rewritten: bool = False

    # Property names whose initializer was just converted inside a wrapper call
    # and still need their decorators normalized.
    self.pending_properties: Set[str] = set()

    # Names of every property converted in this unit, in traversal order.
    self.converted_properties: List[str] = []

    # Enclosing class names, innermost last.
    self.class_stack: List[str] = []

  @property
  def class_name(self) -> str:
    """Name of the innermost enclosing class, or an empty string outside any class."""
    return self.class_stack[-1] if self.class_stack else ""

  def enter_class(self, name: Optional[str]) -> None:
    self.class_stack.append(name or "")

  def exit_class(self) -> None:
    if self.class_stack:
      self.class_stack.pop()

  def mark_rewritten(self, property_name: Optional[str] = None) -> None:
    """
    Records that a rewrite fired.

    Args:
        property_name: Name of the converted property, if the rewrite produced one.
    """
    self.rewritten = True
    if property_name is not None:
      self.converted_properties.append(property_name)

  def identity_name(self) -> str:
    """Derives the class identity string for this unit's file."""
    if self.identity_name_from_path is None:
      return self.file_name
    return self.identity_name_from_path(self.file_name)
