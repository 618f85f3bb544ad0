"""
Tests for the Scope frame entity and the event label helpers.
"""

from convlint.enums import (
  ScopeEvent,
  exit_event,
  handler_event,
  is_conditional_event,
  is_exit_event,
  is_handler_event,
  label_text,
)
from convlint.scope import Scope


def test_scope_defaults():
  scope = Scope(event="function-body")
  assert scope.metadata is False
  assert scope.last_violating_node is None
  assert scope.has_return_statement is False
  assert not scope.is_handler


def test_handler_scope_is_flagged():
  scope = Scope(event=handler_event(ScopeEvent.FUNCTION_BODY))
  assert scope.is_handler


def test_exit_label_keeps_handler_suffix():
  label = handler_event(ScopeEvent.FUNCTION_BODY)
  assert label == "function-body, handler"
  assert exit_event(label) == "function-body:exit, handler"
  assert is_exit_event(exit_event(label))
  assert is_handler_event(exit_event(label))


def test_plain_exit_label():
  assert exit_event(ScopeEvent.CONDITIONAL) == "conditional:exit"
  assert not is_exit_event(ScopeEvent.CONDITIONAL)


def test_conditional_labels():
  assert is_conditional_event(ScopeEvent.CONSEQUENT)
  assert is_conditional_event(ScopeEvent.CHAINED_CONSEQUENT)
  assert not is_conditional_event(ScopeEvent.EXCEPTION_TRY)
  assert not is_conditional_event(ScopeEvent.CONDITIONAL)


def test_label_text_accepts_enum_and_str():
  assert label_text(ScopeEvent.RETURN) == "return"
  assert label_text("custom") == "custom"
