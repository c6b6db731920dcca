"""
Suspension Point Rewriting.

Converts the body of one async function value into a generator body:

    async (x) => await load(x)      ->      (x) => yield* mobxKs._await(load(x))

Every ``await E`` becomes ``yield* AWAIT_ADAPTER(E)``. The rewrite stops at
nested function-like nodes: an ``await`` inside an inner callback belongs to
that callback, not to the coroutine being converted.
"""

import logging
from typing import TypeVar

from keystone_flow.core.capabilities import HostContext
from keystone_flow.core.nodes import Await, Call, Expression, FunctionValue, Node, Yield
from keystone_flow.core.visitor import is_function_like, visit_each_child
from keystone_flow.errors import ContractViolationError

logger = logging.getLogger(__name__)

FunctionValueT = TypeVar("FunctionValueT", bound=FunctionValue)


def rewrite_suspensions(node: Node, await_adapter: Expression) -> Node:
  """
  Recursively replaces ``await`` expressions under ``node``.

  Args:
      node: Subtree of a function body.
      await_adapter: Expression of the await adapter (e.g. ``mobxKs._await``).

  Returns:
      The rewritten subtree, or ``node`` itself if it holds no suspension point.
  """
  if isinstance(node, Await):
    # Operand first, so ``await (await x)`` is fully converted.
    operand = rewrite_suspensions(node.expression, await_adapter)
    return Yield(expression=Call(callee=await_adapter, arguments=(operand,)), delegate=True)

  if is_function_like(node):
    return node

  return visit_each_child(node, lambda child: rewrite_suspensions(child, await_adapter))


def convert_to_generator(fn: FunctionValueT, await_adapter: Expression, host: HostContext) -> FunctionValueT:
  """
  Turns an async function value into a generator function value.

  Args:
      fn: Arrow function or function expression qualified with ``async``.
      await_adapter: Expression of the await adapter.
      host: Supplies the async-qualifier probe.

  Returns:
      The same kind of function value with ``is_async`` cleared,
      ``is_generator`` set and a converted body.

  Raises:
      ContractViolationError: If ``fn`` is not async-qualified.
  """
  if not host.is_async(fn):
    raise ContractViolationError(f"Could not resolve expression as async function: {fn.to_source()}")

  body = rewrite_suspensions(fn.body, await_adapter)
  logger.debug("Converted suspension points of %s", type(fn).__name__)
  return fn.with_changes(body=body, is_async=False, is_generator=True)
