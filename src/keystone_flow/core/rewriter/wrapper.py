"""
Async Adapter Wrapping.

Wraps a generator-converted function value in a call to the async adapter:

    ASYNC_ADAPTER(function* (this: ClassName, ...params) { body })

The target framework invokes the generator with the model instance as
``this``, so a ``this`` parameter typed to the enclosing class is synthesized
when the function does not already declare one.
"""

from typing import Sequence, Tuple

from keystone_flow.core.nodes import (
  Block,
  Call,
  Expression,
  FunctionExpression,
  FunctionValue,
  Parameter,
  ReturnStatement,
  TypeReference,
)

THIS_PARAMETER = "this"


def has_this_parameter(parameters: Sequence[Parameter]) -> bool:
  return any(p.name == THIS_PARAMETER for p in parameters)


def with_this_parameter(parameters: Sequence[Parameter], class_name: str) -> Tuple[Parameter, ...]:
  """
  Prepends ``this: class_name`` unless a ``this`` parameter already exists.

  Args:
      parameters: Original parameter list.
      class_name: Enclosing class name (empty if unknown).

  Returns:
      Tuple[Parameter, ...]: ``[this?, *parameters]``; the originals are untouched.
  """
  if has_this_parameter(parameters):
    return parameters if isinstance(parameters, tuple) else tuple(parameters)
  this_param = Parameter(name=THIS_PARAMETER, type=TypeReference(name=class_name))
  return (this_param, *parameters)


def _as_block(body) -> Block:
  if isinstance(body, Block):
    return body
  # Concise arrow body: `=> expr` is `{ return expr; }`
  return Block(statements=(ReturnStatement(expression=body),))


def wrap_in_async_adapter(fn: FunctionValue, async_adapter: Expression, class_name: str) -> Call:
  """
  Builds the adapter call around a generator function.

  The function's own name and return type are not carried over; the adapter
  call is what the property holds.

  Args:
      fn: Generator-converted arrow function or function expression.
      async_adapter: Expression of the async adapter (e.g. ``mobxKs._async``).
      class_name: Name used to type a synthesized ``this`` parameter.

  Returns:
      Call: ``async_adapter(function* (...) { ... })``.
  """
  generator = FunctionExpression(
    parameters=with_this_parameter(fn.parameters, class_name),
    body=_as_block(fn.body),
    is_async=False,
    is_generator=True,
  )
  return Call(callee=async_adapter, arguments=(generator,))
