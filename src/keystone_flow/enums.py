"""
Enumerations for keystone-flow.

This module defines the closed sets of names the rewrite pass recognizes and
emits: modifier keywords, the triggers it looks for, and the target framework
members it references through the injected namespace import.
"""

from enum import Enum


class ModifierKeyword(str, Enum):
  """
  Qualifier keywords that can precede a declaration.

  Only ``ASYNC`` carries meaning for the rewrite; the rest are passed through.
  """

  ASYNC = "async"
  EXPORT = "export"
  DEFAULT = "default"
  DECLARE = "declare"
  ABSTRACT = "abstract"
  STATIC = "static"
  PUBLIC = "public"
  PRIVATE = "private"
  PROTECTED = "protected"
  READONLY = "readonly"
  OVERRIDE = "override"


class TriggerName(str, Enum):
  """
  Marker names that request a rewrite.
  """

  FLOW = "autoFlow"  # @autoFlow decorator, or prefix of a wrapper call autoFlow(...)
  MODEL = "autoModel"  # @autoModel class decorator


class TargetName(str, Enum):
  """
  Members of the target package referenced by generated code.
  """

  ASYNC_ADAPTER = "_async"
  AWAIT_ADAPTER = "_await"
  FLOW_DECORATOR = "modelFlow"
  IDENTITY_DECORATOR = "model"


class PassState(str, Enum):
  """
  Lifecycle of one Pass Coordinator invocation.

  ``INIT -> SCANNING -> {REWRITTEN, UNCHANGED}``
  """

  INIT = "init"
  SCANNING = "scanning"
  REWRITTEN = "rewritten"
  UNCHANGED = "unchanged"


DEFAULT_TARGET_PACKAGE = "mobx-keystone"
NAMESPACE_HINT = "mobxKs"
