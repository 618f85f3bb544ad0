"""
Rule: an intent handler must return its promise, if there is one.

The fulfillment library waits for a returned promise before sending the
response. A ``.then(...)`` chain that is not returned finishes after the
response was already sent.
"""

import logging
from typing import Optional

import libcst as cst

from convlint.classifier import ResponseClassifier
from convlint.config import LintConfig
from convlint.core.context import LintContext
from convlint.rules.base import LintRule


class AlwaysReturnPromise(LintRule):
  """
  Reports ``.then`` accesses inside a handler that are not part of a return.

  A lambda body is its return value, so a lambda ancestor counts as a return.
  """

  rule_id = "always-return-promise"
  description = "An intent handler must return a promise, if there is any."
  message = "Intent handler must return promise, if there is any."

  def __init__(
    self,
    context: LintContext,
    config: Optional[LintConfig] = None,
    logger: Optional[logging.Logger] = None,
  ) -> None:
    super().__init__(context, config, logger)
    self.classifier = ResponseClassifier(context, self.config, self._logger)

  def visit_Attribute(self, node: cst.Attribute) -> None:
    if node.attr.value != "then":
      return

    inside_handler = False
    is_returned = False
    for ancestor in self.context.ancestors(node):
      if isinstance(ancestor, (cst.Return, cst.Lambda)):
        is_returned = True
      if isinstance(ancestor, (cst.FunctionDef, cst.Lambda)) and self.classifier.is_handler(ancestor):
        inside_handler = True

    if inside_handler and not is_returned:
      self.report(node)
