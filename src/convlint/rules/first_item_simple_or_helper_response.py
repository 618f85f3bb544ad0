"""
Rule: the first response of a turn must be a simple response or a helper.
"""

import logging
from typing import List, Optional

import libcst as cst

from convlint.classifier import HelperResponseClassifier, SimpleResponseClassifier
from convlint.config import LintConfig
from convlint.core.context import LintContext
from convlint.rules.base import LintRule


class FirstItemSimpleOrHelperResponse(LintRule):
  """
  Reports a first response call that carries neither a simple response nor a
  helper, e.g. ``conv.ask(BasicCard(...))`` as the opening response.

  Every function body opens a new turn. Module level code is one turn of its
  own. Uncertain arguments are given the benefit of the doubt.
  """

  rule_id = "first-item-simple-or-helper-response"
  description = "The first item in a response must be a simple response or a helper."
  message = "First item must be a simple response or a helper"

  def __init__(
    self,
    context: LintContext,
    config: Optional[LintConfig] = None,
    logger: Optional[logging.Logger] = None,
  ) -> None:
    super().__init__(context, config, logger)
    self.simple_classifier = SimpleResponseClassifier(context, self.config, self._logger)
    self.helper_classifier = HelperResponseClassifier(context, self.config, self._logger)
    # one flag per open function body; True until its first response call
    self._first_response_pending: List[bool] = [True]

  def visit_FunctionDef_body(self, node: cst.FunctionDef) -> None:
    self._first_response_pending.append(True)

  def leave_FunctionDef_body(self, node: cst.FunctionDef) -> None:
    self._first_response_pending.pop()

  visit_Lambda_body = visit_FunctionDef_body
  leave_Lambda_body = leave_FunctionDef_body

  def _is_simple_or_helper(self, arg: cst.Arg) -> bool:
    for classifier in (self.helper_classifier, self.simple_classifier):
      certain, result = classifier.classify(arg)
      if not certain:
        self._logger.debug("Unable to tell what %s is, assuming a valid first item", self.context.get_source(arg))
        return True
      if result:
        return True
    return False

  def visit_Call(self, node: cst.Call) -> None:
    if not self.simple_classifier.is_action_call(node) or not self._first_response_pending[-1]:
      return
    if not any(self._is_simple_or_helper(arg) for arg in node.args):
      self.report(node.func)
    self._first_response_pending[-1] = False
