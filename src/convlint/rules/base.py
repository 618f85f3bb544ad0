"""
Rule Framework.

A rule is a `libcst.CSTVisitor` run over the module of a `LintContext`. Every
rule instance analyses exactly one file and owns its tracker and its state, so
instances are never reused.

`ScopeEventsMixin` translates libcst traversal callbacks into the
``(node, event)`` stream consumed by a scope tracker:

*   ``If.body`` / ``If.orelse`` push branch frames; ``leave_If`` merges them.
*   ``Try.body``, each except clause and ``Try.orelse`` push frames; the try
    merge runs right after the last except clause (or the else clause) so the
    ``finally`` block counts as sequential code of the enclosing frame.
*   Function and lambda bodies push function frames. The frame is pushed at
    the body (not the definition) so decorators and default values are
    evaluated in the enclosing frame.
*   ``return`` marks the current frame.
"""

import logging
from typing import ClassVar, Dict, List, Optional, Union

import libcst as cst

from convlint.config import LintConfig
from convlint.core.context import LintContext
from convlint.core.result import Violation
from convlint.enums import ScopeEvent, exit_event, handler_event
from convlint.errors import ScopeInvariantError

TryNode = Union[cst.Try, cst.TryStar]


class LintRule(cst.CSTVisitor):
  """
  Base class for all rules.

  Attributes:
      rule_id (str): Stable identifier used in configuration and reports.
      description (str): One line summary shown by ``convlint rules``.
      message (str): Default report message.
      violations (List[Violation]): Reports collected during the pass.
  """

  rule_id: ClassVar[str] = ""
  description: ClassVar[str] = ""
  message: ClassVar[str] = ""

  def __init__(
    self,
    context: LintContext,
    config: Optional[LintConfig] = None,
    logger: Optional[logging.Logger] = None,
  ) -> None:
    """
    Args:
        context: The analysed file.
        config: Linter configuration. Defaults to `LintConfig()`.
        logger: Logger injected into the rule's collaborators.
    """
    super().__init__()
    self.context = context
    self.config = config or LintConfig()
    self._logger = logger or logging.getLogger(__name__)
    self.violations: List[Violation] = []

  def run(self) -> List[Violation]:
    """
    Visits the module of the context and finalizes the pass.

    Returns:
        List[Violation]: The reported violations, in report order.

    Raises:
        ScopeInvariantError: If the traversal left a tracker in a corrupt state.
    """
    self.context.module.visit(self)
    self.finish()
    return self.violations

  def finish(self) -> None:
    """Hook called after the traversal."""

  def report(self, node: Optional[cst.CSTNode], message: Optional[str] = None) -> Violation:
    """
    Records a violation anchored at `node`.

    Args:
        node: The offending node. Falls back to the module start if None.
        message: Overrides the default rule message.

    Returns:
        Violation: The recorded violation.
    """
    position = self.context.get_position(node) if node is not None else None
    violation = Violation(
      rule=self.rule_id,
      message=message or self.message,
      path=str(self.context.path) if self.context.path else None,
    )
    if position is not None:
      violation.line = position.start.line
      violation.column = position.start.column
      violation.end_line = position.end.line
      violation.end_column = position.end.column
    self._logger.debug("%s", violation.format())
    self.violations.append(violation)
    return violation


class ScopeEventsMixin:
  """
  Feeds traversal events into ``self.tracker``.

  Requires the host class to provide ``tracker`` (a `ScopeManager`) and
  ``classifier`` (a `ResponseClassifier`, used to label handler bodies).
  """

  def __init__(self, *args, **kwargs) -> None:
    super().__init__(*args, **kwargs)
    self._function_events: Dict[cst.CSTNode, str] = {}

  def _function_event(self, node: cst.CSTNode) -> str:
    """
    Returns the entry label for the body of `node`, marking handlers.

    The verdict is cached per node so entry and exit labels always agree.
    """
    if node not in self._function_events:
      label = ScopeEvent.FUNCTION_BODY.value
      self._function_events[node] = handler_event(label) if self.classifier.is_handler(node) else label
    return self._function_events[node]

  # --- Conditionals ---

  def visit_If_body(self, node: cst.If) -> None:
    self.tracker.account(node.body, ScopeEvent.CONSEQUENT)

  def visit_If_orelse(self, node: cst.If) -> None:
    if node.orelse is None:
      return
    if isinstance(node.orelse, cst.If):
      self.tracker.account(node.orelse, ScopeEvent.CHAINED_CONSEQUENT)
    else:
      self.tracker.account(node.orelse, ScopeEvent.CONSEQUENT)

  def leave_If(self, original_node: cst.If) -> None:
    self.tracker.account(original_node, exit_event(ScopeEvent.CONDITIONAL))

  # --- Exceptions ---

  def visit_Try_body(self, node: TryNode) -> None:
    if node.handlers:
      self.tracker.account(node.body, ScopeEvent.EXCEPTION_TRY)

  def visit_ExceptHandler(self, node: cst.CSTNode) -> None:
    self.tracker.account(node, ScopeEvent.EXCEPTION_CATCH)

  def leave_Try_handlers(self, node: TryNode) -> None:
    if node.handlers and node.orelse is None:
      self.tracker.account(node, exit_event(ScopeEvent.EXCEPTION))

  def visit_Try_orelse(self, node: TryNode) -> None:
    if node.handlers and node.orelse is not None:
      self.tracker.account(node.orelse, ScopeEvent.EXCEPTION_ELSE)

  def leave_Try_orelse(self, node: TryNode) -> None:
    if node.handlers and node.orelse is not None:
      self.tracker.account(node, exit_event(ScopeEvent.EXCEPTION))

  visit_TryStar_body = visit_Try_body
  visit_ExceptStarHandler = visit_ExceptHandler
  leave_TryStar_handlers = leave_Try_handlers
  visit_TryStar_orelse = visit_Try_orelse
  leave_TryStar_orelse = leave_Try_orelse

  # --- Functions ---

  def visit_FunctionDef_body(self, node: cst.FunctionDef) -> None:
    self.tracker.account(node, self._function_event(node))

  def leave_FunctionDef_body(self, node: cst.FunctionDef) -> None:
    self.tracker.account(node, exit_event(self._function_event(node)))

  def visit_Lambda_body(self, node: cst.Lambda) -> None:
    self.tracker.account(node, self._function_event(node))

  def leave_Lambda_body(self, node: cst.Lambda) -> None:
    self.tracker.account(node, exit_event(self._function_event(node)))

  def visit_Return(self, node: cst.Return) -> None:
    self.tracker.account(node, ScopeEvent.RETURN)

  def finish(self) -> None:
    """
    Checks that every frame pushed during the pass was popped.

    Raises:
        ScopeInvariantError: If frames other than the sentinel remain.
    """
    if self.tracker.depth != 1:
      raise ScopeInvariantError(f"Scope stack was not unwound: {list(self.tracker.scopes)!r}")
