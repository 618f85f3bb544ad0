"""
Exception hierarchy for convlint.

Classification uncertainty is never an error; it is returned as data by the
classifiers. Only configuration problems and broken tracker invariants raise.
"""


class ConvlintError(Exception):
  """Base class for all convlint errors."""


class ScopeInvariantError(ConvlintError, RuntimeError):
  """
  Raised when the frame stack of a scope tracker is corrupted.

  This signals a logic defect in the traversal wiring (e.g. popping the
  sentinel frame, or a missing catch frame during a try merge). It aborts the
  analysis of the current file for the current rule.
  """


class ConfigError(ConvlintError, ValueError):
  """Raised when the linter configuration is invalid."""
