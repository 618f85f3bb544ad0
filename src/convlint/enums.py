"""
Enumerations for convlint.

This module defines the traversal event labels that drive the scope trackers
and the identifiers of the available tracker kinds.
"""

from enum import Enum

EXIT_SUFFIX = ":exit"
HANDLER_SUFFIX = ", handler"


class ScopeEvent(str, Enum):
  """
  Base labels of traversal events fed into a scope tracker.

  Exit events are the entry label plus ``EXIT_SUFFIX``. Function bodies that
  belong to a recognized intent handler carry ``HANDLER_SUFFIX``.
  """

  SENTINEL = "sentinel"
  CONDITIONAL = "conditional"  # exit of the whole if-statement
  CONSEQUENT = "conditional-consequent"
  CHAINED_CONSEQUENT = "conditional-consequent-of-conditional"  # elif
  EXCEPTION_TRY = "exception-try"
  EXCEPTION_CATCH = "exception-catch"
  EXCEPTION_ELSE = "exception-else"
  EXCEPTION = "exception"  # exit of the whole try-statement
  FUNCTION_BODY = "function-body"
  RETURN = "return"


class TrackerKind(str, Enum):
  """
  The closed set of scope tracker variants.
  """

  PRESENCE = "presence"
  COUNTING = "counting"


def label_text(label) -> str:
  """Normalizes an event label (enum member or plain string) to its text."""
  return label.value if isinstance(label, ScopeEvent) else str(label)


def exit_event(label: str) -> str:
  """
  Builds the exit label for an entry label.

  Args:
      label: Entry label (e.g. ``"function-body, handler"``).

  Returns:
      str: The exit label (e.g. ``"function-body:exit, handler"``).
  """
  label = label_text(label)
  if label.endswith(HANDLER_SUFFIX):
    return label[: -len(HANDLER_SUFFIX)] + EXIT_SUFFIX + HANDLER_SUFFIX
  return label + EXIT_SUFFIX


def handler_event(label: str) -> str:
  """Marks a label as belonging to a recognized handler region."""
  label = label_text(label)
  return label + HANDLER_SUFFIX


def is_exit_event(label: str) -> bool:
  """Returns True for labels produced by ``exit_event``."""
  return EXIT_SUFFIX in label_text(label)


def is_handler_event(label: str) -> bool:
  """Returns True for labels produced by ``handler_event``."""
  return label_text(label).endswith(HANDLER_SUFFIX)


def is_conditional_event(label: str) -> bool:
  """Returns True for both plain and chained conditional branch labels."""
  return label_text(label).startswith(ScopeEvent.CONSEQUENT.value)
