"""
Tests for the PresenceScopeManager.

Verifies the boolean merge algebra of conditionals and try-statements, and
the handler exit report.
"""

from unittest.mock import MagicMock

import libcst as cst
import pytest

from convlint.enums import ScopeEvent, exit_event, handler_event
from convlint.errors import ScopeInvariantError
from convlint.scope import PresenceScopeManager

HANDLER = handler_event(ScopeEvent.FUNCTION_BODY)


def enter_handler(tracker, function_node):
  tracker.account(function_node, HANDLER)


def run_if_else(tracker, node, consequent: bool, alternate: bool):
  tracker.account(node.body, ScopeEvent.CONSEQUENT)
  if consequent:
    tracker.set_metadata(True)
  tracker.account(node.orelse, ScopeEvent.CONSEQUENT)
  if alternate:
    tracker.set_metadata(True)
  tracker.account(node, exit_event(ScopeEvent.CONDITIONAL))


def test_frames_outside_handler_default_true(function_node):
  tracker = PresenceScopeManager()
  assert tracker.current_scope().metadata is True
  tracker.account(function_node, ScopeEvent.FUNCTION_BODY)
  assert tracker.current_scope().metadata is True


def test_frames_inside_handler_default_false(function_node, if_node):
  tracker = PresenceScopeManager()
  enter_handler(tracker, function_node)
  assert tracker.current_scope().metadata is False
  tracker.account(if_node.body, ScopeEvent.CONSEQUENT)
  assert tracker.current_scope().metadata is False
  assert tracker.is_scope_inside_handler(tracker.current_scope())


def test_is_scope_inside_handler_unknown_scope_raises():
  tracker = PresenceScopeManager()
  other = PresenceScopeManager().current_scope()
  with pytest.raises(ScopeInvariantError):
    tracker.is_scope_inside_handler(other)


@pytest.mark.parametrize(
  "consequent, alternate, expected",
  [
    (True, True, True),
    (True, False, False),
    (False, True, False),
    (False, False, False),
  ],
)
def test_if_else_merge(function_node, if_else_node, consequent, alternate, expected):
  tracker = PresenceScopeManager()
  enter_handler(tracker, function_node)
  run_if_else(tracker, if_else_node, consequent, alternate)
  assert tracker.depth == 2
  assert tracker.current_scope().metadata is expected


@pytest.mark.parametrize("x, y", [(True, False), (False, True), (True, True), (False, False)])
def test_if_else_merge_is_commutative(function_node, if_else_node, x, y):
  first = PresenceScopeManager()
  enter_handler(first, function_node)
  run_if_else(first, if_else_node, x, y)

  swapped = PresenceScopeManager()
  enter_handler(swapped, function_node)
  run_if_else(swapped, if_else_node, y, x)

  assert first.current_scope().metadata == swapped.current_scope().metadata


def test_if_without_else_never_guarantees(function_node, if_node):
  tracker = PresenceScopeManager()
  enter_handler(tracker, function_node)
  tracker.account(if_node.body, ScopeEvent.CONSEQUENT)
  tracker.set_metadata(True)
  tracker.account(if_node, exit_event(ScopeEvent.CONDITIONAL))
  assert tracker.current_scope().metadata is False


def test_parent_presence_survives_merge(function_node, if_node):
  tracker = PresenceScopeManager()
  enter_handler(tracker, function_node)
  tracker.set_metadata(True)
  tracker.account(if_node.body, ScopeEvent.CONSEQUENT)
  tracker.account(if_node, exit_event(ScopeEvent.CONDITIONAL))
  assert tracker.current_scope().metadata is True


@pytest.mark.parametrize(
  "in_try, in_catch, expected",
  [
    (True, True, True),
    (True, False, False),
    (False, True, False),
  ],
)
def test_try_merge(function_node, try_node, in_try, in_catch, expected):
  tracker = PresenceScopeManager()
  enter_handler(tracker, function_node)
  tracker.account(try_node.body, ScopeEvent.EXCEPTION_TRY)
  if in_try:
    tracker.set_metadata(True)
  tracker.account(try_node.handlers[0], ScopeEvent.EXCEPTION_CATCH)
  if in_catch:
    tracker.set_metadata(True)
  tracker.account(try_node, exit_event(ScopeEvent.EXCEPTION))
  assert tracker.depth == 2
  assert tracker.current_scope().metadata is expected


def test_try_else_counts_as_try_body(function_node):
  node = cst.parse_statement("try:\n  pass\nexcept A:\n  pass\nexcept B:\n  pass\nelse:\n  pass\n")
  tracker = PresenceScopeManager()
  enter_handler(tracker, function_node)
  tracker.account(node.body, ScopeEvent.EXCEPTION_TRY)
  for handler in node.handlers:
    tracker.account(handler, ScopeEvent.EXCEPTION_CATCH)
    tracker.set_metadata(True)
  tracker.account(node.orelse, ScopeEvent.EXCEPTION_ELSE)
  tracker.set_metadata(True)
  tracker.account(node, exit_event(ScopeEvent.EXCEPTION))
  assert tracker.depth == 2
  assert tracker.current_scope().metadata is True


def test_handler_exit_invokes_reporter(function_node):
  reporter = MagicMock()
  tracker = PresenceScopeManager(reporter=reporter)
  enter_handler(tracker, function_node)
  tracker.account(function_node, exit_event(HANDLER))
  reporter.assert_called_once_with(function_node)
  assert tracker.depth == 1


def test_plain_function_exit_does_not_report(function_node):
  reporter = MagicMock()
  tracker = PresenceScopeManager(reporter=reporter)
  tracker.account(function_node, ScopeEvent.FUNCTION_BODY)
  tracker.account(function_node, exit_event(ScopeEvent.FUNCTION_BODY))
  reporter.assert_not_called()


def test_function_exit_with_open_branch_raises(function_node, if_node):
  tracker = PresenceScopeManager()
  enter_handler(tracker, function_node)
  tracker.account(if_node.body, ScopeEvent.CONSEQUENT)
  with pytest.raises(ScopeInvariantError):
    tracker.account(function_node, exit_event(HANDLER))
