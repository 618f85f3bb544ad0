"""
Presence Tracker.

Tracks whether a qualifying action (a client library response call) is
guaranteed on every feasible path out of a region. The metadata of each frame
is a bool, and join points merge with OR/AND:

*   ``if``: ``parent or (consequent and alternate)``. A conditional without an
    ``else`` never guarantees anything by itself.
*   ``try``: ``parent or ((try or else) and all(except clauses))``.

Outside of intent handlers the absence of the action is not a violation, so
frames created there default to True. Frames inside a handler start False.
When a handler body closes, the reporter is called with the function node so
the rule can flag handlers that never produce a response.
"""

from typing import Optional

import libcst as cst

from convlint.enums import ScopeEvent, TrackerKind, is_conditional_event, is_handler_event
from convlint.errors import ScopeInvariantError
from convlint.scope.manager import FUNCTION_NODES, TRY_NODES, Metadata, ScopeManager
from convlint.scope.scope import Scope


class PresenceScopeManager(ScopeManager):
  """
  Scope manager storing boolean presence metadata.
  """

  kind = TrackerKind.PRESENCE

  def is_scope_inside_handler(self, scope: Scope) -> bool:
    """
    Checks whether `scope` lies inside an intent handler body.

    Args:
        scope: A frame currently on the stack.

    Returns:
        bool: True if the frame, or any frame below it, is a handler frame.

    Raises:
        ScopeInvariantError: If `scope` is not on the stack.
    """
    if not self._scope_stack:
      return False
    for pos, candidate in enumerate(self._scope_stack):
      if candidate is scope:
        return any(s.is_handler for s in self._scope_stack[: pos + 1])
    raise ScopeInvariantError(f"{scope!r} is not in the scope stack, but should be.")

  def _create_scope(self, event: str) -> Scope:
    inside_handler = is_handler_event(event)
    if not inside_handler and self._scope_stack:
      inside_handler = self.is_scope_inside_handler(self.current_scope())
    return Scope(event=event, metadata=not inside_handler)

  def _check_metadata(self, value: Metadata) -> None:
    if not isinstance(value, bool):
      raise TypeError(f"Presence metadata must be a bool, got {type(value).__name__}")

  def _dispatch_exit(self, node: Optional[cst.CSTNode], label: str) -> None:
    if isinstance(node, cst.If):
      self._handle_if_exit(node)
    elif isinstance(node, TRY_NODES):
      self._handle_try_exit(node)
    elif isinstance(node, FUNCTION_NODES):
      self._handle_function_exit(node)
    else:
      self.exit_scope()

  def _handle_if_exit(self, if_node: cst.If) -> None:
    """
    Merges the branches of a conditional into the parent frame.

    Handles ``if``, ``if/else`` and ``if/elif/...`` chains. Each ``elif`` is an
    ``If`` of its own and is merged into its chain frame first.

    Args:
        if_node: The conditional being left.
    """
    if not is_conditional_event(self.current_scope().event):
      self._logger.debug("Leaving a conditional, but the scope stack looks like %r", self._scope_stack)
      return

    else_scope = self._pop_alternate_scope(if_node)
    if_scope = self.exit_scope()
    parent = self.current_scope()
    guaranteed = else_scope is not None and bool(if_scope.metadata) and bool(else_scope.metadata)
    parent.metadata = bool(parent.metadata) or guaranteed

  def _handle_try_exit(self, try_node: cst.CSTNode) -> None:
    """
    Merges a try-statement: either the try body (and its else clause) runs to
    completion, or control jumps to one of the except clauses.

    Args:
        try_node: The try-statement being left.
    """
    try_scope, catch_scopes, else_scope = self._pop_try_scopes(try_node)
    try_value = bool(try_scope.metadata) or (else_scope is not None and bool(else_scope.metadata))
    catch_value = all(bool(s.metadata) for s in catch_scopes)
    parent = self.current_scope()
    parent.metadata = bool(parent.metadata) or (try_value and catch_value)

  def _handle_function_exit(self, function_node: cst.CSTNode) -> None:
    """
    Pops a function frame, reporting first if it is an intent handler frame.

    Args:
        function_node: The function or lambda being left.
    """
    top = self.current_scope()
    if not top.event.startswith(ScopeEvent.FUNCTION_BODY.value):
      raise ScopeInvariantError(f"Expected a function body to be on top of stack, but found '{top.event}'")
    if top.is_handler:
      self._reporter(function_node)
    self.exit_scope()
