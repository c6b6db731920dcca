"""
Exception taxonomy for the rewrite pass.

Every error raised by the transform is fatal for the unit being processed:
the pass is deterministic, so nothing is retried and nothing is partially
applied. The host build pipeline is expected to surface these as build failures.
"""

ERROR_PREFIX = "[keystone-flow]"


def error_message(message: str) -> str:
  """Prefixes a message with the package tag."""
  return f"{ERROR_PREFIX}: {message}"


class FlowTransformError(Exception):
  """Base class for all errors raised while transforming a source unit."""

  def __init__(self, message: str):
    super().__init__(error_message(message))
    self.detail = message


class ContractViolationError(FlowTransformError):
  """
  An internal matcher invariant was broken.

  Raised when the suspension rewriter receives a function value without the
  async qualifier, or when a wrapped property cannot be resolved back to a
  property declaration.
  """


class HostCapabilityError(FlowTransformError):
  """
  The host compilation context cannot supply a required capability
  (currently only async-qualifier detection).
  """
