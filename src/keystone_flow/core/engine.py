"""
Orchestration Engine for the Async-to-Flow Rewrite.

This module provides `FlowPass`, the Pass Coordinator that runs the rewrite
over one source unit, and `create_transformer`, the factory a host build
pipeline calls once per compilation context.

A pass moves through ``INIT -> SCANNING -> {REWRITTEN, UNCHANGED}``:

1.  **Init**: reserves the namespace identifier, builds the adapter and
    decorator expressions rooted at it, and prepends the namespace import to a
    working copy of the unit.
2.  **Scanning**: one traversal. Per node, in priority order:
    - ``@autoModel`` class -> identity decorator (then descend into members);
    - property initialized with ``autoFlow(async fn)`` -> adapter call;
    - that same property -> flow decorators normalized;
    - ``@autoFlow async`` method -> equivalent property holding a function expression;
    - ``@autoFlow`` property holding an async function value -> adapter call + decorators;
    - anything else -> recursive descent.
3.  **Rewritten**: the working copy is returned, import included.
4.  **Unchanged**: the original unit object is returned; the import is discarded.

All three surface forms converge on::

    @mobxKs.modelFlow
    name = mobxKs._async(function* (this: ClassName, ...params) { ... yield* mobxKs._await(x) ... });
"""

import logging
from typing import Any, Callable, Dict, Optional, Union

from keystone_flow.config import TransformOptions
from keystone_flow.core.capabilities import HostContext
from keystone_flow.core.nodes import (
  ArrowFunction,
  Call,
  ClassDeclaration,
  Expression,
  FunctionExpression,
  FunctionValue,
  Identifier,
  MethodDeclaration,
  Node,
  PropertyDeclaration,
  SourceUnit,
)
from keystone_flow.core.rewriter.class_identity import rewrite_class_identity
from keystone_flow.core.rewriter.context import TransformContext
from keystone_flow.core.rewriter.decorators import has_decorator, normalize_flow_decorators
from keystone_flow.core.rewriter.imports import inject_namespace_import, reserve_namespace_identifier
from keystone_flow.core.rewriter.suspension import convert_to_generator
from keystone_flow.core.rewriter.wrapper import wrap_in_async_adapter
from keystone_flow.core.visitor import visit_each_child
from keystone_flow.enums import PassState, TriggerName
from keystone_flow.errors import ContractViolationError
from keystone_flow.utils.console import log_warning

logger = logging.getLogger(__name__)

Transformer = Callable[[SourceUnit], SourceUnit]
TransformerFactory = Callable[[Optional[HostContext]], Transformer]

_FUNCTION_VALUES = (ArrowFunction, FunctionExpression)


def is_trigger_call(node: Node) -> bool:
  """
  Checks for ``autoFlow...(<single argument>)``.

  The callee must be a plain identifier starting with the flow trigger name.
  """
  return (
    isinstance(node, Call)
    and isinstance(node.callee, Identifier)
    and node.callee.text.startswith(TriggerName.FLOW.value)
    and len(node.arguments) == 1
  )


class FlowPass:
  """
  Pass Coordinator for a single source unit.

  Instances are single-use: create one per unit, call `run` once.
  """

  def __init__(self, unit: SourceUnit, options: TransformOptions, host: HostContext):
    """
    Args:
        unit: The unit to transform. Never mutated.
        options: Resolved transform options.
        host: Capabilities supplied by the compilation context.
    """
    self.unit = unit
    self.options = options
    self.host = host
    self.state = PassState.INIT
    self.ctx: Optional[TransformContext] = None

  def run(self) -> SourceUnit:
    """
    Executes the pass.

    Returns:
        SourceUnit: The rewritten unit, or the original object if nothing matched.

    Raises:
        ContractViolationError: If a matched form breaks an internal invariant.
        HostCapabilityError: If the host cannot detect async qualifiers.
    """
    namespace = reserve_namespace_identifier(self.unit)
    self.ctx = TransformContext(
      namespace=namespace,
      file_name=self.unit.file_name,
      host=self.host,
      identity_name_from_path=self.options.identity_name_from_path,
    )
    working = inject_namespace_import(self.unit, self.options.target_package_name, namespace)

    self.state = PassState.SCANNING
    result = visit_each_child(working, self._visit)

    if self.ctx.rewritten:
      self.state = PassState.REWRITTEN
      logger.debug(
        "Rewrote %s (flows: %s)",
        self.unit.file_name,
        ", ".join(self.ctx.converted_properties) or "-",
      )
      return result

    self.state = PassState.UNCHANGED
    return self.unit

  # --- Scanning ---

  def _visit(self, node: Node) -> Node:
    ctx = self.ctx

    if isinstance(node, ClassDeclaration):
      return self._visit_class(node)

    # myFunc = autoFlow(async (...args) => { ... })
    # myFunc = autoFlow(async function (this: MyClass, ...args) { ... })
    if isinstance(node, PropertyDeclaration):
      updated = visit_each_child(node, lambda child: self._rewrite_trigger_call(child, node))

      if node.name in ctx.pending_properties:
        ctx.pending_properties.discard(node.name)
        if not isinstance(updated, PropertyDeclaration):
          raise ContractViolationError("Could not resolve property declaration")
        return self._finish_flow_property(updated, updated.initializer)

    # @autoFlow async myFunc(...args) { ... }
    if (
      isinstance(node, MethodDeclaration)
      and node.body is not None
      and has_decorator(node.modifiers, TriggerName.FLOW.value)
    ):
      node = self._method_to_property(node)

    # @autoFlow myFunc = async (...args) => { ... }
    # @autoFlow myFunc = async function (this: MyClass, ...args) { ... }
    if (
      isinstance(node, PropertyDeclaration)
      and node.initializer is not None
      and has_decorator(node.modifiers, TriggerName.FLOW.value)
    ):
      fn = node.initializer
      if isinstance(fn, _FUNCTION_VALUES):
        return self._finish_flow_property(node, self._convert(fn))

    return visit_each_child(node, self._visit)

  def _visit_class(self, node: ClassDeclaration) -> Node:
    rewritten = rewrite_class_identity(node, self.ctx)
    if rewritten is not None:
      node = rewritten

    self.ctx.enter_class(node.name)
    try:
      return visit_each_child(node, self._visit)
    finally:
      self.ctx.exit_class()

  def _rewrite_trigger_call(self, child: Node, prop: PropertyDeclaration) -> Node:
    """Converts the property's initializer when it is a trigger call around a function value."""
    if child is not prop.initializer or not is_trigger_call(child):
      return child

    fn = child.arguments[0]
    if not isinstance(fn, _FUNCTION_VALUES):
      log_warning(
        f"Left [code]{prop.name}[/code] in [path]{self.unit.file_name}[/path] untouched: "
        f"{child.callee.text}() expects an arrow function or function expression"
      )
      return child

    self.ctx.pending_properties.add(prop.name)
    return self._convert(fn)

  # --- Rewrites ---

  def _convert(self, fn: FunctionValue) -> Expression:
    generator = convert_to_generator(fn, self.ctx.await_adapter, self.host)
    return wrap_in_async_adapter(generator, self.ctx.async_adapter, self.ctx.class_name)

  def _finish_flow_property(self, prop: PropertyDeclaration, initializer: Optional[Expression]) -> PropertyDeclaration:
    modifiers = normalize_flow_decorators(prop.modifiers, self.ctx.flow_decorator)
    self.ctx.mark_rewritten(prop.name)
    return prop.with_changes(modifiers=modifiers, initializer=initializer)

  def _method_to_property(self, method: MethodDeclaration) -> PropertyDeclaration:
    """
    Turns a decorated method into ``name = <function expression>``.

    Modifiers move to the property unchanged; the async qualifier is carried
    by the function expression as well, so the property path can convert it.
    """
    fn = FunctionExpression(
      parameters=method.parameters,
      body=method.body,
      name=method.name,
      is_async=self.host.is_async(method),
      is_generator=method.is_generator,
      return_type=method.return_type,
    )
    return PropertyDeclaration(
      name=method.name,
      modifiers=method.modifiers,
      initializer=fn,
      optional=method.optional,
    )


def create_transformer(
  options: Union[TransformOptions, Dict[str, Any], None] = None,
) -> TransformerFactory:
  """
  Creates a transformer factory.

  Args:
      options: ``TransformOptions``, a mapping of option values
          (snake_case or camelCase), or ``None`` for defaults.

  Returns:
      A factory that takes the host's ``HostContext`` (``None`` for the
      built-in one) and returns a ``SourceUnit -> SourceUnit`` transform.
  """
  resolved = TransformOptions.coerce(options)

  def factory(host: Optional[HostContext] = None) -> Transformer:
    host_ctx = host if host is not None else HostContext()

    def transform(unit: SourceUnit) -> SourceUnit:
      return FlowPass(unit, resolved, host_ctx).run()

    return transform

  return factory


def transform_source_unit(
  unit: SourceUnit,
  options: Union[TransformOptions, Dict[str, Any], None] = None,
  host: Optional[HostContext] = None,
) -> SourceUnit:
  """
  One-shot helper: transforms a single unit.

  Args:
      unit: The unit to transform.
      options: Transform options (see `create_transformer`).
      host: Host capabilities; defaults to the built-in ``HostContext``.

  Returns:
      SourceUnit: The rewritten unit, or ``unit`` itself when nothing matched.
  """
  return create_transformer(options)(host)(unit)
