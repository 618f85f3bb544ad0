"""
CLI Command Handlers Facade.

This module re-exports handlers from `convlint.cli.handlers` so the dispatcher
and the tests have a single import point.
"""

from convlint.cli.handlers.check import handle_check, render_violations
from convlint.cli.handlers.rules import handle_rules

__all__ = [
  "handle_check",
  "handle_rules",
  "render_violations",
]
