"""
Helper Response Classifier.

Examples::

    SimpleResponse("foo")  # no
    "foo"                  # no
    BasicCard({})          # no
    foo()                  # uncertain, the return type of foo is unknown
    List(items)            # yes
"""

import logging
from typing import Optional

import libcst as cst

from convlint.classifier.base import (
  CONSTANT_NAMES,
  HELPER_CLASSES,
  UNCERTAIN_NODES,
  Classification,
  ResponseClassifier,
  construction_name,
)
from convlint.config import LintConfig


class HelperResponseClassifier(ResponseClassifier):
  """
  Classifies an expression as a helper response (sign-in, permission, list...).
  """

  def __init__(self, context=None, config: Optional[LintConfig] = None, logger: Optional[logging.Logger] = None):
    super().__init__(context, config, logger)
    self.helper_classes = frozenset(HELPER_CLASSES) | frozenset(self.config.extra_helper_classes)

  def _classify_expression(self, node: cst.BaseExpression, resolve: bool) -> Classification:
    if isinstance(node, cst.Call):
      name = construction_name(node)
      if name is None:
        return self._create_response(False, False)
      return self._create_response(True, name in self.helper_classes)

    if isinstance(node, cst.Name):
      if node.value in CONSTANT_NAMES:
        return self._create_response(True, False)
      return self._classify_name(node, resolve)

    if isinstance(node, UNCERTAIN_NODES):
      return self._create_response(False, False)

    return self._create_response(True, False)
