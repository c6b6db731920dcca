# src/keystone_flow/core/nodes.py

"""
Syntax Tree Nodes.

This module defines the immutable tree the rewrite pass operates on. It models
the subset of TypeScript needed to express classes, decorated members, async
function values and the generator/adapter shapes they are converted into.

Every node is a frozen dataclass and every sequence is a tuple, so a rewrite
never mutates its input: ``with_changes`` produces a new node that shares all
untouched children with the original (structural sharing).

Node groups:
    - Expressions: Identifier, StringLiteral, NumericLiteral, PropertyAccess,
      Call, Await, Yield, BinaryExpression, ArrowFunction, FunctionExpression
    - Statements: Block, ExpressionStatement, ReturnStatement, VariableStatement,
      FunctionDeclaration, ClassDeclaration, NamespaceImport
    - Class members: PropertyDeclaration, MethodDeclaration
    - Metadata: Decorator, Modifier, Parameter, TypeReference, HeritageClause
    - Root: SourceUnit

``to_source()`` renders TypeScript-like text. It is used for diagnostics and
tests, not as a general-purpose printer.
"""

import textwrap
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from typing import Any, Optional, Tuple, TypeVar, Union

from keystone_flow.enums import ModifierKeyword

NodeT = TypeVar("NodeT", bound="Node")

INDENT = "  "


def _indent(text: str) -> str:
  return textwrap.indent(text, INDENT)


def _quote(value: str) -> str:
  escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
  return f'"{escaped}"'


def _operand(expr: "Node") -> str:
  """Renders an expression, parenthesized when used as a callee, receiver or operand."""
  if isinstance(expr, (Await, Yield, BinaryExpression, FunctionValue)):
    return f"({expr.to_source()})"
  return expr.to_source()


def _join(nodes: Tuple["Node", ...], sep: str = ", ") -> str:
  return sep.join(n.to_source() for n in nodes)


def _modifier_prefix(modifiers: Tuple["Node", ...]) -> str:
  if not modifiers:
    return ""
  return _join(modifiers, " ") + " "


def _type_suffix(type_ref: Optional["TypeReference"]) -> str:
  return f": {type_ref.to_source()}" if type_ref is not None else ""


@dataclass(frozen=True)
class Node(ABC):
  """
  Abstract base class for all syntax tree nodes.

  Sequence fields given as lists are frozen into tuples on construction, so
  hosts may build nodes with either.
  """

  def __post_init__(self) -> None:
    for f in fields(self):
      value = getattr(self, f.name)
      if isinstance(value, list):
        object.__setattr__(self, f.name, tuple(value))

  @abstractmethod
  def to_source(self) -> str:
    """
    Renders the node as TypeScript-like source text.

    Returns:
        str: Source representation of the node.
    """

  def with_changes(self: NodeT, **changes: Any) -> NodeT:
    """
    Creates a copy of the node with the given fields replaced.

    Args:
        **changes: Field names mapped to their new values.

    Returns:
        A new node of the same type. Unlisted fields are shared, not copied.
    """
    return replace(self, **changes)


# --- Metadata ---


@dataclass(frozen=True)
class TypeReference(Node):
  """A named type, optionally generic (e.g. ``Promise<number>``)."""

  name: str
  type_arguments: Tuple["TypeReference", ...] = ()

  def to_source(self) -> str:
    if self.type_arguments:
      return f"{self.name}<{_join(self.type_arguments)}>"
    return self.name


@dataclass(frozen=True)
class Modifier(Node):
  """A keyword qualifier such as ``async`` or ``static``."""

  keyword: ModifierKeyword

  def to_source(self) -> str:
    return self.keyword.value


@dataclass(frozen=True)
class Decorator(Node):
  """
  An annotation attached to a class or class member.

  The expression is an identifier (``@autoFlow``), a property access
  (``@mobxKs.modelFlow``) or a call of either (``@mobxKs.model("name")``).
  """

  expression: "Expression"

  def to_source(self) -> str:
    return f"@{self.expression.to_source()}"


@dataclass(frozen=True)
class Parameter(Node):
  """A function parameter; ``this`` is represented as a parameter named ``this``."""

  name: str
  type: Optional[TypeReference] = None
  initializer: Optional["Expression"] = None
  is_rest: bool = False

  def to_source(self) -> str:
    text = ("..." if self.is_rest else "") + self.name + _type_suffix(self.type)
    if self.initializer is not None:
      text += f" = {self.initializer.to_source()}"
    return text


@dataclass(frozen=True)
class HeritageClause(Node):
  """An ``extends`` / ``implements`` clause. Passed through untouched."""

  keyword: str
  types: Tuple["Expression", ...] = ()

  def to_source(self) -> str:
    return f"{self.keyword} {_join(self.types)}"


# --- Expressions ---


@dataclass(frozen=True)
class Identifier(Node):
  text: str

  def to_source(self) -> str:
    return self.text


@dataclass(frozen=True)
class StringLiteral(Node):
  value: str

  def to_source(self) -> str:
    return _quote(self.value)


@dataclass(frozen=True)
class NumericLiteral(Node):
  text: str

  def to_source(self) -> str:
    return self.text


@dataclass(frozen=True)
class PropertyAccess(Node):
  """``expression.name``"""

  expression: "Expression"
  name: str

  def to_source(self) -> str:
    return f"{_operand(self.expression)}.{self.name}"


@dataclass(frozen=True)
class Call(Node):
  """``callee(arg, ...)``"""

  callee: "Expression"
  arguments: Tuple["Expression", ...] = ()

  def to_source(self) -> str:
    return f"{_operand(self.callee)}({_join(self.arguments)})"


@dataclass(frozen=True)
class Await(Node):
  """A suspension point: ``await expression``."""

  expression: "Expression"

  def to_source(self) -> str:
    return f"await {_operand(self.expression)}"


@dataclass(frozen=True)
class Yield(Node):
  """``yield expression``, or ``yield* expression`` when delegating to a sub-generator."""

  expression: Optional["Expression"] = None
  delegate: bool = False

  def to_source(self) -> str:
    keyword = "yield*" if self.delegate else "yield"
    if self.expression is None:
      return keyword
    return f"{keyword} {_operand(self.expression)}"


@dataclass(frozen=True)
class BinaryExpression(Node):
  left: "Expression"
  operator: str
  right: "Expression"

  def to_source(self) -> str:
    return f"{_operand(self.left)} {self.operator} {_operand(self.right)}"


@dataclass(frozen=True)
class FunctionValue(Node):
  """
  Common shape of function values (arrow functions and function expressions).

  Attributes:
      parameters: Ordered parameter list.
      body: A ``Block``, or a single expression for concise arrow bodies.
      is_async: True when qualified with ``async``.
      is_generator: True for ``function*`` values.
      return_type: Optional declared return type.
  """

  parameters: Tuple[Parameter, ...]
  body: Union["Block", "Expression"]
  is_async: bool = False
  is_generator: bool = False
  return_type: Optional[TypeReference] = None

  def _head(self) -> str:
    return "async " if self.is_async else ""


@dataclass(frozen=True)
class ArrowFunction(FunctionValue):
  """``async (a, b) => body``"""

  def to_source(self) -> str:
    body = self.body.to_source()
    if isinstance(self.body, FunctionValue):
      body = f"({body})"
    return f"{self._head()}({_join(self.parameters)}){_type_suffix(self.return_type)} => {body}"


@dataclass(frozen=True)
class FunctionExpression(FunctionValue):
  """``async function name(a, b) { ... }`` or ``function* (a, b) { ... }``"""

  name: Optional[str] = None

  def to_source(self) -> str:
    keyword = "function*" if self.is_generator else "function"
    name = f" {self.name}" if self.name else " "
    return (
      f"{self._head()}{keyword}{name}({_join(self.parameters)}){_type_suffix(self.return_type)} {self.body.to_source()}"
    )


# --- Statements ---


@dataclass(frozen=True)
class Block(Node):
  statements: Tuple["Statement", ...] = ()

  def to_source(self) -> str:
    if not self.statements:
      return "{}"
    return "{\n" + _indent(_join(self.statements, "\n")) + "\n}"


@dataclass(frozen=True)
class ExpressionStatement(Node):
  expression: "Expression"

  def to_source(self) -> str:
    return f"{self.expression.to_source()};"


@dataclass(frozen=True)
class ReturnStatement(Node):
  expression: Optional["Expression"] = None

  def to_source(self) -> str:
    if self.expression is None:
      return "return;"
    return f"return {self.expression.to_source()};"


@dataclass(frozen=True)
class VariableStatement(Node):
  """``const name: T = initializer;``"""

  name: str
  initializer: Optional["Expression"] = None
  kind: str = "const"
  type: Optional[TypeReference] = None

  def to_source(self) -> str:
    text = f"{self.kind} {self.name}{_type_suffix(self.type)}"
    if self.initializer is not None:
      text += f" = {self.initializer.to_source()}"
    return text + ";"


@dataclass(frozen=True)
class FunctionDeclaration(Node):
  name: str
  parameters: Tuple[Parameter, ...] = ()
  body: Optional[Block] = None
  modifiers: Tuple["ModifierLike", ...] = ()
  is_generator: bool = False
  return_type: Optional[TypeReference] = None

  def to_source(self) -> str:
    keyword = "function*" if self.is_generator else "function"
    head = f"{_modifier_prefix(self.modifiers)}{keyword} {self.name}({_join(self.parameters)})"
    head += _type_suffix(self.return_type)
    if self.body is None:
      return head + ";"
    return f"{head} {self.body.to_source()}"


@dataclass(frozen=True)
class NamespaceImport(Node):
  """``import * as binding from "module_specifier";``"""

  binding: Identifier
  module_specifier: str

  def to_source(self) -> str:
    return f"import * as {self.binding.to_source()} from {_quote(self.module_specifier)};"


# --- Class members ---


@dataclass(frozen=True)
class PropertyDeclaration(Node):
  """``@dec name?: T = initializer;``"""

  name: str
  modifiers: Tuple["ModifierLike", ...] = ()
  type: Optional[TypeReference] = None
  initializer: Optional["Expression"] = None
  optional: bool = False

  def to_source(self) -> str:
    text = _modifier_prefix(self.modifiers) + self.name + ("?" if self.optional else "")
    text += _type_suffix(self.type)
    if self.initializer is not None:
      text += f" = {self.initializer.to_source()}"
    return text + ";"


@dataclass(frozen=True)
class MethodDeclaration(Node):
  """``@dec async name(params): T { ... }``. A method without body is an overload signature."""

  name: str
  parameters: Tuple[Parameter, ...] = ()
  body: Optional[Block] = None
  modifiers: Tuple["ModifierLike", ...] = ()
  return_type: Optional[TypeReference] = None
  is_generator: bool = False
  optional: bool = False

  def to_source(self) -> str:
    star = "*" if self.is_generator else ""
    head = f"{_modifier_prefix(self.modifiers)}{star}{self.name}{'?' if self.optional else ''}"
    head += f"({_join(self.parameters)}){_type_suffix(self.return_type)}"
    if self.body is None:
      return head + ";"
    return f"{head} {self.body.to_source()}"


@dataclass(frozen=True)
class ClassDeclaration(Node):
  name: Optional[str]
  members: Tuple["ClassMember", ...] = ()
  modifiers: Tuple["ModifierLike", ...] = ()
  heritage_clauses: Tuple[HeritageClause, ...] = ()

  def to_source(self) -> str:
    head = _modifier_prefix(self.modifiers) + "class"
    if self.name:
      head += f" {self.name}"
    if self.heritage_clauses:
      head += " " + _join(self.heritage_clauses, " ")
    if not self.members:
      return head + " {}"
    return head + " {\n" + _indent(_join(self.members, "\n")) + "\n}"


# --- Root ---


@dataclass(frozen=True)
class SourceUnit(Node):
  """
  One file's syntax tree: the unit of transformation.

  Attributes:
      file_name: Path of the file the unit was parsed from.
      statements: Top-level statements in order.
      is_declaration_file: True for ambient declaration files.
      referenced_files: Triple-slash path references, passed through.
      type_reference_directives: Triple-slash type references, passed through.
  """

  file_name: str
  statements: Tuple["Statement", ...] = ()
  is_declaration_file: bool = False
  referenced_files: Tuple[str, ...] = ()
  type_reference_directives: Tuple[str, ...] = ()

  def to_source(self) -> str:
    return _join(self.statements, "\n")


Expression = Union[
  Identifier,
  StringLiteral,
  NumericLiteral,
  PropertyAccess,
  Call,
  Await,
  Yield,
  BinaryExpression,
  ArrowFunction,
  FunctionExpression,
]
Statement = Union[
  Block,
  ExpressionStatement,
  ReturnStatement,
  VariableStatement,
  FunctionDeclaration,
  ClassDeclaration,
  NamespaceImport,
]
ModifierLike = Union[Decorator, Modifier]
ClassMember = Union[PropertyDeclaration, MethodDeclaration]
