"""
Host Capability Probes.

The rewrite needs to know whether a function-like node is async-qualified.
That knowledge belongs to the host toolchain (whatever produced the tree), so
it is injected through a ``HostContext`` rather than hard-wired. A host that
cannot supply the probe makes the transform fail fast on first use instead of
silently skipping rewrites.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from keystone_flow.core.nodes import FunctionValue, Modifier, Node
from keystone_flow.enums import ModifierKeyword
from keystone_flow.errors import HostCapabilityError

AsyncQualifierProbe = Callable[[Node], bool]


def detect_async_qualifier(node: Node) -> bool:
  """
  Default probe for trees built from ``keystone_flow.core.nodes``.

  Function values carry the qualifier as a flag; declarations carry it as an
  ``async`` modifier.

  Args:
      node: Any node.

  Returns:
      bool: True if the node is an async function or async-qualified declaration.
  """
  if isinstance(node, FunctionValue):
    return node.is_async

  modifiers = getattr(node, "modifiers", ())
  return any(isinstance(m, Modifier) and m.keyword == ModifierKeyword.ASYNC for m in modifiers)


@dataclass(frozen=True)
class HostContext:
  """
  Capabilities supplied by the compilation context that invokes the transform.

  Attributes:
      detect_async_qualifier: Probe answering "is this node async?". ``None``
          means the host cannot answer.
  """

  detect_async_qualifier: Optional[AsyncQualifierProbe] = detect_async_qualifier

  def is_async(self, node: Node) -> bool:
    """
    Runs the async-qualifier probe.

    Raises:
        HostCapabilityError: If the host did not supply a probe.
    """
    if self.detect_async_qualifier is None:
      raise HostCapabilityError("Could not resolve detect_async_qualifier")
    return self.detect_async_qualifier(node)
