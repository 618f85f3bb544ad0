"""
Scope Tracking Package.

Stack-based trackers that mirror syntax tree traversal and merge path-sensitive
metadata at control-flow join points.

Modules:
    - ``scope``: The `Scope` frame entity.
    - ``manager``: The abstract `ScopeManager` (push/pop discipline, invariants).
    - ``presence``: Boolean "was a response produced on every path" tracking.
    - ``count``: Integer "how many simple responses on a path" tracking.
"""

import logging
from typing import Dict, Optional, Type

from convlint.enums import TrackerKind
from convlint.scope.count import CountScopeManager
from convlint.scope.manager import Reporter, ScopeManager
from convlint.scope.presence import PresenceScopeManager
from convlint.scope.scope import Scope

_TRACKERS: Dict[TrackerKind, Type[ScopeManager]] = {
  TrackerKind.PRESENCE: PresenceScopeManager,
  TrackerKind.COUNTING: CountScopeManager,
}


def create_tracker(
  kind: TrackerKind,
  context=None,
  reporter: Optional[Reporter] = None,
  logger: Optional[logging.Logger] = None,
) -> ScopeManager:
  """
  Builds a tracker of the requested kind.

  Args:
      kind: Which tracker variant to build.
      context: The `LintContext` of the analysed file.
      reporter: Callback invoked at merge points.
      logger: Logger for debug output.

  Returns:
      ScopeManager: A fresh tracker holding only the sentinel frame.
  """
  return _TRACKERS[TrackerKind(kind)](context, reporter, logger)


__all__ = [
  "CountScopeManager",
  "PresenceScopeManager",
  "Scope",
  "ScopeManager",
  "create_tracker",
]
