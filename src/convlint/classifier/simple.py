"""
Simple Response Classifier.

Examples::

    SimpleResponse("foo")  # yes
    "foo"                  # yes
    "a" + name             # yes
    BasicCard({})          # no
    foo()                  # uncertain, the return type of foo is unknown
"""

import libcst as cst

from convlint.classifier.base import (
  CONSTANT_NAMES,
  UNCERTAIN_NODES,
  Classification,
  ResponseClassifier,
  construction_name,
)


class SimpleResponseClassifier(ResponseClassifier):
  """
  Classifies an expression as a simple (spoken/text) response.
  """

  def _classify_expression(self, node: cst.BaseExpression, resolve: bool) -> Classification:
    if isinstance(node, cst.Call):
      name = construction_name(node)
      if name is None:
        return self._create_response(False, False)
      return self._create_response(True, name == "SimpleResponse")

    if isinstance(node, cst.Name):
      if node.value in CONSTANT_NAMES:
        return self._create_response(True, True)
      return self._classify_name(node, resolve)

    if isinstance(node, UNCERTAIN_NODES):
      return self._create_response(False, False)

    return self._create_response(True, self._is_string(node))

  def _is_string(self, node: cst.BaseExpression) -> bool:
    """
    Checks if node evaluates to something rendered as text.

    Args:
        node: The expression.

    Returns:
        bool: True for string and number literals and string concatenation.
    """
    if isinstance(node, (cst.BaseString, cst.BaseNumber)):
      return True
    if isinstance(node, cst.BinaryOperation):
      return isinstance(node.left, cst.BaseString) or isinstance(node.right, cst.BaseString)
    return False
