"""
Counting Tracker.

Computes, per region, the number of qualifying actions (e.g. simple responses)
that are guaranteed to occur along a single path. The metadata of each frame
is a non-negative int.

Merge rules:

*   **Standalone conditional** (or the head of an ``elif`` chain): code before
    and after is sequential, but only one branch runs, so the parent gains
    ``max(consequent, alternate)``.
*   **Chained conditional** (an ``elif``): only one branch of the whole chain
    runs, so the chain frame becomes ``max(parent, consequent, alternate)``.
*   **Returning branches**: a branch that returns never reaches the code after
    the conditional. After the merge is reported, the parent value is
    recomputed from the non-returning branches only.
*   **try/except**: ``max(parent, max(except clauses), try + else)``.

The reporter is invoked when a conditional merge changes the parent count and
after every try merge. The consuming rule compares the current count with its
threshold and anchors the report at `last_violating_node`.
"""

import logging
from typing import List, Optional

import libcst as cst

from convlint.enums import TrackerKind, is_conditional_event
from convlint.scope.manager import TRY_NODES, Metadata, ScopeManager
from convlint.scope.scope import Scope


class CountScopeManager(ScopeManager):
  """
  Scope manager storing counting metadata.
  """

  kind = TrackerKind.COUNTING

  def bump_metadata(self, delta: int = 1, violating_node: Optional[cst.CSTNode] = None) -> int:
    """
    Increments the count of the current frame.

    Args:
        delta: Amount to add (non-negative).
        violating_node: Node to anchor a potential report at.

    Returns:
        int: The new count of the current frame.
    """
    scope = self.current_scope()
    new_value = scope.metadata + delta
    self.set_metadata(new_value)
    if violating_node is not None:
      scope.last_violating_node = violating_node
    return new_value

  def _create_scope(self, event: str) -> Scope:
    return Scope(event=event, metadata=0)

  def _check_metadata(self, value: Metadata) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
      raise TypeError(f"Counting metadata must be an int, got {type(value).__name__}")
    if value < 0:
      raise ValueError(f"Counting metadata must be non-negative, got {value}")

  def _dispatch_exit(self, node: Optional[cst.CSTNode], label: str) -> None:
    if self._logger.isEnabledFor(logging.DEBUG):
      self._logger.debug("Dispatching %s for %s. Scope stack = %r", label, self._describe(node), self._scope_stack)
    if isinstance(node, cst.If):
      self._handle_if_exit(node)
    elif isinstance(node, TRY_NODES):
      self._handle_try_exit(node)
    else:
      self.exit_scope()

  def _is_chained(self, if_node: cst.If) -> bool:
    """
    Checks whether `if_node` is the ``elif`` of an enclosing conditional.

    Args:
        if_node: The conditional being left.

    Returns:
        bool: True if the parent node is an ``If`` whose ``orelse`` is `if_node`.
    """
    if self._context is None:
      return False
    parent = self._context.get_parent(if_node)
    return isinstance(parent, cst.If) and parent.orelse is if_node

  def _handle_if_exit(self, if_node: cst.If) -> None:
    """
    Merges the branches of a conditional into the parent frame.

    Args:
        if_node: The conditional being left.
    """
    if not is_conditional_event(self.current_scope().event):
      self._logger.debug("Leaving a conditional, but the scope stack looks like %r", self._scope_stack)
      return

    else_scope = self._pop_alternate_scope(if_node)
    if_scope = self.exit_scope()
    parent = self.current_scope()
    chained = self._is_chained(if_node)

    initial = parent.metadata
    branches = [if_scope.metadata, else_scope.metadata if else_scope else 0]
    parent.metadata = self._combine(initial, max(branches), chained)

    if parent.metadata != initial:
      parent.last_violating_node = if_node
      self._reporter(if_node)

    self._undo_returning_branches(parent, initial, chained, if_scope, else_scope)

  def _undo_returning_branches(
    self, parent: Scope, initial: int, chained: bool, if_scope: Scope, else_scope: Optional[Scope]
  ) -> None:
    """
    Recomputes the parent count from the branches that fall through.

    Args:
        parent: The frame the branches were merged into.
        initial: The parent count before the merge.
        chained: Whether the conditional is an ``elif``.
        if_scope: The consequent frame.
        else_scope: The alternate frame, or None if there is no ``else``.
    """
    if_returns = if_scope.has_return_statement
    else_returns = else_scope is not None and else_scope.has_return_statement
    if not (if_returns or else_returns):
      return

    surviving: List[int] = []
    if not if_returns:
      surviving.append(if_scope.metadata)
    if else_scope is None:
      # the implicit empty else falls through
      surviving.append(0)
    elif not else_returns:
      surviving.append(else_scope.metadata)

    if not surviving:
      parent.metadata = initial
    else:
      parent.metadata = self._combine(initial, max(surviving), chained)

  @staticmethod
  def _combine(initial: int, branch_value: int, chained: bool) -> int:
    """Folds the value of the executed branch into the parent count."""
    if chained:
      return max(initial, branch_value)
    return initial + branch_value

  def _handle_try_exit(self, try_node: cst.CSTNode) -> None:
    """
    Merges a try-statement. The try body and the except clauses are mutually
    exclusive paths, so the larger of them wins.

    Args:
        try_node: The try-statement being left.
    """
    try_scope, catch_scopes, else_scope = self._pop_try_scopes(try_node)
    try_value = try_scope.metadata + (else_scope.metadata if else_scope else 0)
    catch_value = max(s.metadata for s in catch_scopes)

    parent = self.current_scope()
    initial = parent.metadata
    parent.metadata = max(initial, catch_value, try_value)
    if parent.metadata != initial:
      parent.last_violating_node = try_node
    self._reporter(try_node)
