"""
Rule: an intent handler must produce a response on every path.

Uses the presence tracker. A call counts as a response when it is a client
library call, or when it is any call made inside a handler: the linter cannot
tell what an arbitrary helper function does, so it assumes the best.
"""

import logging
from typing import Optional

import libcst as cst

from convlint.classifier import ResponseClassifier
from convlint.config import LintConfig
from convlint.core.context import LintContext
from convlint.rules.base import LintRule, ScopeEventsMixin
from convlint.scope import PresenceScopeManager


class MustReturnResponse(ScopeEventsMixin, LintRule):
  """
  Reports intent handlers that can finish without a response.

  Example::

      @app.intent("welcome")
      def welcome(conv):
        if conv.user.verified:
          conv.ask("Welcome back!")
        # flagged: nothing is said to unverified users
  """

  rule_id = "must-return-response"
  description = "An intent handler must return a client library response."
  message = "Must return a response from the intent handler."

  def __init__(
    self,
    context: LintContext,
    config: Optional[LintConfig] = None,
    logger: Optional[logging.Logger] = None,
  ) -> None:
    super().__init__(context, config, logger)
    self.classifier = ResponseClassifier(context, self.config, self._logger)
    self.tracker = PresenceScopeManager(context, self._on_handler_exit, self._logger)

  def _on_handler_exit(self, function: Optional[cst.CSTNode]) -> None:
    # metadata tells whether a response was found on every path of the handler
    if self.tracker.current_scope().metadata:
      return
    anchor = function.name if isinstance(function, cst.FunctionDef) else function
    self.report(anchor)

  def visit_Call(self, node: cst.Call) -> None:
    scope = self.tracker.current_scope()
    if self.classifier.is_action_call(node) or self.tracker.is_scope_inside_handler(scope):
      self.tracker.set_metadata(True)
