"""
Error taxonomy for the tw-apply macro.

Every error aborts the current invocation. The host is expected to discard
the attempted rewrite when one of these (or an ``OSError`` from the
stylesheet write) is raised.
"""


class TwApplyError(Exception):
  """Base class for all macro failures."""


class ConfigurationError(TwApplyError, ValueError):
  """
  Raised when the per-invocation options cannot be used.

  Args:
      message (str): Human readable reason, naming the offending value.
  """


class MissingFilenameError(TwApplyError):
  """Raised when the invocation carries no usable source filename."""

  def __init__(self, message: str = 'The "filename" property was not found.') -> None:
    super().__init__(message)
