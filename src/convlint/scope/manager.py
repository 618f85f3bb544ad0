"""
Scope Stack Engine.

`ScopeManager` mirrors the traversal of a syntax tree with a stack of `Scope`
frames. Rules feed it `(node, event)` pairs through `account`; entry events
push frames, exit events pop them and fold the popped metadata into the parent
frame at control-flow join points, and return markers flag the current frame.

The bottom of the stack is a sentinel frame that is never popped. Attempting to
pop it, or finding an unexpected frame on top of the stack during a merge,
raises `ScopeInvariantError`.

Concrete trackers decide the type of the metadata (`_create_scope`), how it is
merged (`_dispatch_exit`) and which values are legal (`_check_metadata`).
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple, Union

import libcst as cst

from convlint.enums import (
  ScopeEvent,
  TrackerKind,
  is_conditional_event,
  is_exit_event,
  label_text,
)
from convlint.errors import ScopeInvariantError
from convlint.scope.scope import Scope

Reporter = Callable[[Optional[cst.CSTNode]], None]
Metadata = Union[bool, int]

FUNCTION_NODES = (cst.FunctionDef, cst.Lambda)
TRY_NODES = (cst.Try, cst.TryStar)


class ScopeManager(ABC):
  """
  Abstract frame-stack discipline shared by all trackers.

  Attributes:
      kind (TrackerKind): The tracker variant implemented by the subclass.
  """

  kind: TrackerKind

  def __init__(self, context=None, reporter: Optional[Reporter] = None, logger: Optional[logging.Logger] = None):
    """
    Initializes the stack with the sentinel frame.

    Args:
        context: The `LintContext` of the file being analysed. Used for
            ancestor queries and debug output; may be None in isolation.
        reporter: Callback invoked at merge points. Receives the node whose
            exit triggered the merge. The rule decides whether to report.
        logger: Logger for debug traces of the frame stack.
    """
    self._context = context
    self._reporter: Reporter = reporter or (lambda node=None: None)
    self._logger = logger or logging.getLogger(__name__)
    self._scope_stack: List[Scope] = []
    self._scope_stack.append(self._create_scope(ScopeEvent.SENTINEL.value))

  # --- Public API ---

  def current_scope(self) -> Scope:
    """
    Returns the top frame. The stack is never empty.

    Returns:
        Scope: The innermost active frame.
    """
    return self._scope_stack[-1]

  @property
  def depth(self) -> int:
    """Number of frames on the stack, sentinel included."""
    return len(self._scope_stack)

  @property
  def scopes(self) -> Tuple[Scope, ...]:
    """Read-only snapshot of the stack, outermost frame first."""
    return tuple(self._scope_stack)

  def account(self, node: Optional[cst.CSTNode], event: Union[str, ScopeEvent]) -> None:
    """
    Feeds one traversal event into the tracker.

    Args:
        node: The node being entered or left.
        event: Entry label, exit label (``<label>:exit``) or the return marker.
    """
    label = label_text(event)
    if is_exit_event(label):
      self._dispatch_exit(node, label)
    elif label == ScopeEvent.RETURN.value:
      # control never reaches code after the return on this path
      self.current_scope().has_return_statement = True
    else:
      self.enter_scope(label)

  def set_metadata(self, value: Metadata) -> None:
    """
    Replaces the metadata of the current frame.

    Args:
        value: New value; must match the tracker's metadata type.

    Raises:
        TypeError: If the value has the wrong type for this tracker.
        ValueError: If the value is out of range for this tracker.
    """
    self._check_metadata(value)
    self.current_scope().metadata = value

  # --- Frame management ---

  def enter_scope(self, label: str) -> None:
    """
    Pushes a new frame tagged with `label`.

    Args:
        label: The entry event label.
    """
    self._scope_stack.append(self._create_scope(label))

  def _invariant(self) -> None:
    """
    Checks that the frame about to be popped is not the sentinel.

    Raises:
        ScopeInvariantError: If the stack only holds the sentinel frame.
    """
    if len(self._scope_stack) <= 1 or self.current_scope().event == ScopeEvent.SENTINEL.value:
      raise ScopeInvariantError(f"{self.current_scope()!r} is about to be popped")

  def exit_scope(self) -> Scope:
    """
    Pops the top frame.

    Returns:
        Scope: The popped frame.
    """
    self._invariant()
    return self._scope_stack.pop()

  def _expect_top(self, predicate: Callable[[str], bool], expected: str) -> Scope:
    """
    Pops the top frame after checking its label.

    Args:
        predicate: Test applied to the top frame's label.
        expected: Human readable description of the expected frame.

    Returns:
        Scope: The popped frame.

    Raises:
        ScopeInvariantError: If the top frame does not satisfy `predicate`.
    """
    top = self.current_scope()
    if not predicate(top.event):
      raise ScopeInvariantError(f"Expected {expected} to be on top of stack, but found '{top.event}'")
    return self.exit_scope()

  def _pop_alternate_scope(self, if_node: cst.If) -> Optional[Scope]:
    """
    Pops the frame of the `else`/`elif` branch, if the conditional has one.

    Args:
        if_node: The conditional being left.

    Returns:
        Optional[Scope]: The alternate frame, or None.
    """
    if if_node.orelse is not None and is_conditional_event(self.current_scope().event):
      return self.exit_scope()
    return None

  def _pop_try_scopes(self, try_node: Union[cst.Try, cst.TryStar]) -> Tuple[Scope, List[Scope], Optional[Scope]]:
    """
    Pops the frames of a try-statement: else clause, except clauses, try body.

    Args:
        try_node: The try-statement being left.

    Returns:
        Tuple: (try frame, except frames in source order, else frame or None).
    """
    else_scope = None
    if try_node.orelse is not None:
      else_scope = self._expect_top(lambda e: e == ScopeEvent.EXCEPTION_ELSE.value, "an else clause")

    catch_scopes = []
    for _ in range(max(len(try_node.handlers), 1)):
      catch_scopes.append(self._expect_top(lambda e: e == ScopeEvent.EXCEPTION_CATCH.value, "an except clause"))
    catch_scopes.reverse()

    try_scope = self._expect_top(lambda e: e == ScopeEvent.EXCEPTION_TRY.value, "a try block")
    return try_scope, catch_scopes, else_scope

  def _describe(self, node: Optional[cst.CSTNode]) -> str:
    """Returns the source of `node` for debug output, if a context is available."""
    if node is None or self._context is None:
      return "<unknown>"
    return self._context.get_source(node)

  # --- Hooks ---

  @abstractmethod
  def _create_scope(self, event: str) -> Scope:
    """
    Factory method for frames. Sets the tracker's default metadata.

    Args:
        event: The label of the frame.

    Returns:
        Scope: A new frame.
    """

  @abstractmethod
  def _dispatch_exit(self, node: Optional[cst.CSTNode], label: str) -> None:
    """
    Folds the frames of the region `node` closes into the parent frame.

    Args:
        node: The node being left.
        label: The exit label.
    """

  @abstractmethod
  def _check_metadata(self, value: Metadata) -> None:
    """
    Validates a metadata value before it is stored.

    Args:
        value: The candidate value.
    """
