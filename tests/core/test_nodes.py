"""
Tests for Syntax Tree Nodes.

Verifies:
1.  Immutability and structural equality.
2.  ``with_changes`` shares untouched children.
3.  Source rendering of the shapes the rewrite produces.
"""

import dataclasses

import pytest

from keystone_flow.core.nodes import (
  ArrowFunction,
  Await,
  BinaryExpression,
  Block,
  Call,
  ClassDeclaration,
  Decorator,
  FunctionExpression,
  HeritageClause,
  Identifier,
  MethodDeclaration,
  Modifier,
  NamespaceImport,
  Parameter,
  PropertyAccess,
  PropertyDeclaration,
  ReturnStatement,
  SourceUnit,
  StringLiteral,
  TypeReference,
  VariableStatement,
  Yield,
)
from keystone_flow.enums import ModifierKeyword


def test_nodes_are_frozen():
  node = Identifier("x")
  with pytest.raises(dataclasses.FrozenInstanceError):
    node.text = "y"


def test_structural_equality():
  assert Call(Identifier("f"), (Identifier("a"),)) == Call(Identifier("f"), (Identifier("a"),))
  assert Call(Identifier("f"), (Identifier("a"),)) != Call(Identifier("f"), (Identifier("b"),))


def test_with_changes_shares_children():
  callee = Identifier("f")
  args = (Identifier("a"),)
  call = Call(callee, args)

  updated = call.with_changes(arguments=(Identifier("b"),))

  assert updated is not call
  assert updated.callee is callee
  assert call.arguments is args


def test_render_arrow_and_await():
  fn = ArrowFunction(
    parameters=(Parameter("input"),),
    body=Await(Call(Identifier("callApi"), (Identifier("input"),))),
    is_async=True,
  )
  assert fn.to_source() == "async (input) => await callApi(input)"


def test_render_generator_function_expression():
  fn = FunctionExpression(
    parameters=(Parameter("this", TypeReference("Test")), Parameter("input")),
    body=Block((ReturnStatement(Yield(Call(Identifier("load"), ()), delegate=True)),)),
    is_generator=True,
  )
  assert fn.to_source() == "function* (this: Test, input) {\n  return yield* load();\n}"


def test_render_named_async_function_expression():
  fn = FunctionExpression(parameters=(), body=Block(), name="run", is_async=True, return_type=TypeReference("Promise", (TypeReference("void"),)))
  assert fn.to_source() == "async function run(): Promise<void> {}"


def test_render_parenthesizes_operands():
  expr = BinaryExpression(Yield(Identifier("a"), delegate=True), "+", Identifier("b"))
  assert expr.to_source() == "(yield* a) + b"
  assert PropertyAccess(Await(Identifier("p")), "value").to_source() == "(await p).value"


def test_render_parameters():
  assert Parameter("args", TypeReference("Array", (TypeReference("string"),)), is_rest=True).to_source() == (
    "...args: Array<string>"
  )
  assert Parameter("limit", initializer=StringLiteral("10")).to_source() == 'limit = "10"'


def test_render_string_literal_escapes():
  assert StringLiteral('a "b"\\c').to_source() == '"a \\"b\\"\\\\c"'


def test_render_class_with_members():
  cls = ClassDeclaration(
    name="Todo",
    modifiers=(Modifier(ModifierKeyword.EXPORT), Decorator(Call(Identifier("model"), (StringLiteral("todo"),)))),
    heritage_clauses=(HeritageClause("extends", (Call(Identifier("Model"), ()),)),),
    members=(
      PropertyDeclaration("done", type=TypeReference("boolean"), optional=True),
      MethodDeclaration(
        "save",
        parameters=(),
        body=Block((VariableStatement("x", Identifier("y")),)),
        modifiers=(Modifier(ModifierKeyword.ASYNC),),
      ),
    ),
  )
  assert cls.to_source() == (
    'export @model("todo") class Todo extends Model() {\n'
    "  done?: boolean;\n"
    "  async save() {\n"
    "    const x = y;\n"
    "  }\n"
    "}"
  )


def test_render_empty_class():
  assert ClassDeclaration("Empty").to_source() == "class Empty {}"


def test_render_method_signature_without_body():
  assert MethodDeclaration("load", parameters=(Parameter("id"),)).to_source() == "load(id);"


def test_render_source_unit():
  unit = SourceUnit(
    file_name="a.ts",
    statements=(
      NamespaceImport(Identifier("mobxKs"), "mobx-keystone"),
      ClassDeclaration("A"),
    ),
  )
  assert unit.to_source() == 'import * as mobxKs from "mobx-keystone";\nclass A {}'


def test_list_fields_are_frozen_into_tuples():
  prop = PropertyDeclaration("fn", modifiers=[Decorator(Identifier("autoFlow"))])
  cls = ClassDeclaration("Test", members=[prop])
  fn = ArrowFunction(parameters=[Parameter("input")], body=Block([]))

  assert cls.members == (prop,)
  assert prop.modifiers == (Decorator(Identifier("autoFlow")),)
  assert fn.parameters == (Parameter("input"),)
  assert fn.body.statements == ()
  assert cls == ClassDeclaration("Test", members=(prop,))
  assert isinstance(cls.with_changes(members=[]).members, tuple)
