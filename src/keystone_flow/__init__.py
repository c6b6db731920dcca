"""
keystone-flow Package.

A source-to-source rewrite pass that turns async functions on model classes
into generator-based flows for mobx-keystone.

Usage
-----

.. code-block:: python

    from keystone_flow import create_transformer, HostContext

    transform = create_transformer({"targetPackageName": "mobx-keystone"})(HostContext())
    new_unit = transform(unit)

``unit`` is a :class:`keystone_flow.core.nodes.SourceUnit` produced by the
host toolchain. The transform returns ``unit`` itself when nothing matched.
"""

from keystone_flow.config import TransformOptions
from keystone_flow.core.capabilities import HostContext, detect_async_qualifier
from keystone_flow.core.engine import FlowPass, create_transformer, transform_source_unit
from keystone_flow.errors import ContractViolationError, FlowTransformError, HostCapabilityError

__version__ = "0.1.0"

__all__ = [
  "ContractViolationError",
  "FlowPass",
  "FlowTransformError",
  "HostCapabilityError",
  "HostContext",
  "TransformOptions",
  "create_transformer",
  "detect_async_qualifier",
  "transform_source_unit",
]
