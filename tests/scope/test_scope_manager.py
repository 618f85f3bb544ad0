"""
Tests for the frame stack discipline shared by all trackers.

Verifies:
1. The sentinel frame is never popped.
2. Try merges check the labels of the frames they pop.
3. Metadata writes are validated at the boundary.
4. The tracker factory builds the requested variant.
"""

import pytest

from convlint.enums import ScopeEvent, TrackerKind, exit_event
from convlint.errors import ScopeInvariantError
from convlint.scope import CountScopeManager, PresenceScopeManager, create_tracker


def test_stack_starts_with_sentinel():
  tracker = CountScopeManager()
  assert tracker.depth == 1
  assert tracker.current_scope().event == ScopeEvent.SENTINEL.value


def test_enter_and_exit_scope():
  tracker = CountScopeManager()
  tracker.enter_scope(ScopeEvent.EXCEPTION_TRY.value)
  assert tracker.depth == 2
  assert tracker.current_scope().metadata == 0

  popped = tracker.exit_scope()
  assert popped.event == ScopeEvent.EXCEPTION_TRY.value
  assert tracker.depth == 1
  with pytest.raises(ScopeInvariantError):
    tracker.exit_scope()


def test_popping_sentinel_raises(function_node):
  tracker = CountScopeManager()
  with pytest.raises(ScopeInvariantError):
    tracker.account(function_node, exit_event(ScopeEvent.FUNCTION_BODY))


def test_presence_popping_sentinel_raises(if_else_node):
  tracker = PresenceScopeManager()
  with pytest.raises(ScopeInvariantError):
    tracker.account(if_else_node.body, "block:exit")


def test_try_exit_without_catch_frame_raises(try_node):
  tracker = CountScopeManager()
  tracker.account(try_node.body, ScopeEvent.EXCEPTION_TRY)
  with pytest.raises(ScopeInvariantError, match="except clause"):
    tracker.account(try_node, exit_event(ScopeEvent.EXCEPTION))


def test_try_exit_without_try_frame_raises(try_node):
  tracker = PresenceScopeManager()
  tracker.account(try_node.handlers[0], ScopeEvent.EXCEPTION_CATCH)
  with pytest.raises(ScopeInvariantError, match="try block"):
    tracker.account(try_node, exit_event(ScopeEvent.EXCEPTION))


def test_return_marks_current_frame(function_node):
  tracker = CountScopeManager()
  tracker.account(function_node, ScopeEvent.FUNCTION_BODY)
  tracker.account(None, ScopeEvent.RETURN)
  assert tracker.current_scope().has_return_statement
  assert tracker.depth == 2


def test_scopes_snapshot_is_read_only():
  tracker = CountScopeManager()
  snapshot = tracker.scopes
  assert isinstance(snapshot, tuple)
  assert len(snapshot) == 1


def test_count_metadata_validation():
  tracker = CountScopeManager()
  with pytest.raises(ValueError):
    tracker.set_metadata(-1)
  with pytest.raises(TypeError):
    tracker.set_metadata(True)
  with pytest.raises(TypeError):
    tracker.set_metadata("2")
  tracker.set_metadata(3)
  assert tracker.current_scope().metadata == 3


def test_presence_metadata_validation():
  tracker = PresenceScopeManager()
  with pytest.raises(TypeError):
    tracker.set_metadata(1)
  tracker.set_metadata(False)
  assert tracker.current_scope().metadata is False


def test_bump_metadata_records_violating_node(function_node):
  tracker = CountScopeManager()
  assert tracker.bump_metadata() == 1
  assert tracker.bump_metadata(2, violating_node=function_node) == 3
  assert tracker.current_scope().last_violating_node is function_node


@pytest.mark.parametrize(
  "kind, expected",
  [
    (TrackerKind.PRESENCE, PresenceScopeManager),
    (TrackerKind.COUNTING, CountScopeManager),
    ("counting", CountScopeManager),
  ],
)
def test_create_tracker(kind, expected):
  tracker = create_tracker(kind)
  assert isinstance(tracker, expected)
  assert tracker.depth == 1
