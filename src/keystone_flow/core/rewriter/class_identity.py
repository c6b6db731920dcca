"""
Class Identity Rewriting.

    @autoModel class Todo {}   ->   @mobxKs.model("src/todo.ts") class Todo {}

The identity string comes from the unit's file path, passed through the
configured naming hook when one is set.
"""

import logging
from typing import Optional

from keystone_flow.core.nodes import Call, ClassDeclaration, Decorator, StringLiteral
from keystone_flow.core.rewriter.context import TransformContext
from keystone_flow.core.rewriter.decorators import find_decorator
from keystone_flow.enums import TriggerName

logger = logging.getLogger(__name__)


def build_identity_decorator(ctx: TransformContext) -> Decorator:
  """Builds ``@<namespace>.model("<identity>")`` for the current unit."""
  name = ctx.identity_name()
  return Decorator(expression=Call(callee=ctx.identity_expression, arguments=(StringLiteral(value=name),)))


def rewrite_class_identity(node: ClassDeclaration, ctx: TransformContext) -> Optional[ClassDeclaration]:
  """
  Replaces the ``@autoModel`` trigger with the identity decorator.

  The identity decorator takes the trigger's position in the modifier list.
  Marks the context as rewritten.

  Args:
      node: Class declaration to inspect.
      ctx: Per-invocation context.

  Returns:
      The rewritten class, or ``None`` if the class carries no trigger.
  """
  trigger = find_decorator(node.modifiers, TriggerName.MODEL.value)
  if trigger is None:
    return None

  identity = build_identity_decorator(ctx)
  modifiers = tuple(identity if m is trigger else m for m in node.modifiers)

  ctx.mark_rewritten()
  logger.debug("Assigned identity %s to class %s", identity.to_source(), node.name)
  return node.with_changes(modifiers=modifiers)
