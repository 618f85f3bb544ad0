"""
Rule: at most two simple responses may be produced on a single path.

The Actions on Google platform renders at most two chat bubbles per turn. The
counting tracker computes how many simple responses are guaranteed along one
path; the rule reports whenever that count exceeds the configured threshold.
"""

import logging
from typing import Optional

import libcst as cst

from convlint.classifier import SimpleResponseClassifier
from convlint.config import LintConfig
from convlint.core.context import LintContext
from convlint.rules.base import LintRule, ScopeEventsMixin
from convlint.scope import CountScopeManager

_NUMBER_WORDS = ("zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine", "ten")


def threshold_message(threshold: int) -> str:
  """
  Builds the report message for a threshold.

  Args:
      threshold: The maximum number of simple responses.

  Returns:
      str: e.g. "At most two simple responses are allowed."
  """
  amount = _NUMBER_WORDS[threshold] if threshold < len(_NUMBER_WORDS) else str(threshold)
  if threshold == 1:
    return f"At most {amount} simple response is allowed."
  return f"At most {amount} simple responses are allowed."


class AtMostTwoSimpleResponses(ScopeEventsMixin, LintRule):
  """
  Reports response calls that push a path over the simple response limit.
  """

  rule_id = "at-most-two-simple-responses"
  description = "A response must have at most two simple responses."
  message = threshold_message(2)

  def __init__(
    self,
    context: LintContext,
    config: Optional[LintConfig] = None,
    logger: Optional[logging.Logger] = None,
  ) -> None:
    super().__init__(context, config, logger)
    self.threshold = self.config.max_simple_responses
    self.classifier = SimpleResponseClassifier(context, self.config, self._logger)
    self.tracker = CountScopeManager(context, self._check_threshold, self._logger)

  def _check_threshold(self, node: Optional[cst.CSTNode] = None) -> None:
    scope = self.tracker.current_scope()
    if scope.metadata > self.threshold:
      self.report(scope.last_violating_node or node, threshold_message(self.threshold))

  def _is_simple_response(self, arg: cst.Arg) -> bool:
    certain, result = self.classifier.classify(arg)
    if not certain:
      self._logger.debug(
        "%s may have been an extra simple response. Unable to tell for sure.", self.context.get_source(arg)
      )
    return certain and result

  def visit_Call(self, node: cst.Call) -> None:
    if not self.classifier.is_action_call(node):
      return
    for arg in node.args:
      if self._is_simple_response(arg):
        self.tracker.bump_metadata(1, violating_node=node.func)
      self._check_threshold(node.func)
