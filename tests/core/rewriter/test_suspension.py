"""
Tests for Suspension Point Rewriting.

Verifies:
1.  ``await E`` -> ``yield* _await(E)``, including nested awaits.
2.  Nested function values keep their own awaits.
3.  Qualifier flags flip from async to generator.
4.  Non-async input is a contract violation.
"""

import pytest

from keystone_flow.core.capabilities import HostContext
from keystone_flow.core.nodes import (
  ArrowFunction,
  Await,
  Block,
  Call,
  FunctionDeclaration,
  FunctionExpression,
  Identifier,
  Parameter,
  PropertyAccess,
  ReturnStatement,
  VariableStatement,
  Yield,
)
from keystone_flow.core.rewriter.suspension import convert_to_generator, rewrite_suspensions
from keystone_flow.errors import ContractViolationError

AWAIT_ADAPTER = PropertyAccess(Identifier("mobxKs"), "_await")


def _adapted(expr):
  return Yield(Call(AWAIT_ADAPTER, (expr,)), delegate=True)


@pytest.fixture
def host():
  return HostContext()


def test_concise_arrow_body(host):
  fn = ArrowFunction(
    parameters=(Parameter("input"),),
    body=Await(Call(Identifier("callApi"), (Identifier("input"),))),
    is_async=True,
  )

  result = convert_to_generator(fn, AWAIT_ADAPTER, host)

  assert isinstance(result, ArrowFunction)
  assert result.is_async is False
  assert result.is_generator is True
  assert result.parameters is fn.parameters
  assert result.body == _adapted(Call(Identifier("callApi"), (Identifier("input"),)))


def test_block_body_function_expression(host):
  fn = FunctionExpression(
    parameters=(),
    body=Block((ReturnStatement(Await(Identifier("p"))),)),
    name="load",
    is_async=True,
  )

  result = convert_to_generator(fn, AWAIT_ADAPTER, host)

  assert result.name == "load"
  assert result.body == Block((ReturnStatement(_adapted(Identifier("p"))),))
  assert result.to_source() == "function* load() {\n  return yield* mobxKs._await(p);\n}"


def test_nested_await_operands_are_converted():
  tree = Await(Await(Identifier("p")))
  assert rewrite_suspensions(tree, AWAIT_ADAPTER) == _adapted(_adapted(Identifier("p")))


def test_nested_functions_are_left_untouched(host):
  inner_arrow = ArrowFunction((), Await(Call(Identifier("inner"), ())), is_async=True)
  inner_decl = FunctionDeclaration("helper", body=Block((ReturnStatement(Await(Identifier("q"))),)))
  fn = ArrowFunction(
    parameters=(),
    body=Block(
      (
        VariableStatement("cb", inner_arrow),
        inner_decl,
        ReturnStatement(Await(Call(Identifier("outer"), (Identifier("cb"),)))),
      )
    ),
    is_async=True,
  )

  result = convert_to_generator(fn, AWAIT_ADAPTER, host)
  statements = result.body.statements

  assert statements[0].initializer is inner_arrow
  assert statements[1] is inner_decl
  assert statements[2] == ReturnStatement(_adapted(Call(Identifier("outer"), (Identifier("cb"),))))


def test_body_without_awaits_is_shared(host):
  body = Block((ReturnStatement(Identifier("x")),))
  fn = ArrowFunction((), body, is_async=True)

  result = convert_to_generator(fn, AWAIT_ADAPTER, host)

  assert result.body is body
  assert result.is_generator is True


def test_non_async_function_is_contract_violation(host):
  fn = ArrowFunction((Parameter("x"),), Identifier("x"))

  with pytest.raises(ContractViolationError) as excinfo:
    convert_to_generator(fn, AWAIT_ADAPTER, host)

  assert str(excinfo.value).startswith("[keystone-flow]: Could not resolve expression as async function")
  assert "(x) => x" in str(excinfo.value)
