"""
Scope frame entity.

A `Scope` is one entry of a tracker's frame stack. It holds the metadata
accumulated for a single lexical or control-flow region (a function body, a
conditional branch, a try block or an except clause).
"""

from dataclasses import dataclass
from typing import Optional, Union

import libcst as cst

from convlint.enums import is_handler_event


@dataclass
class Scope:
  """
  Accumulated tracker state for one region.
  """

  event: str
  """Label of the traversal event that pushed this frame."""

  metadata: Union[bool, int] = False
  """The tracked value: a bool for presence tracking, a count for counting."""

  last_violating_node: Optional[cst.CSTNode] = None
  """The node that most recently pushed the count over a reportable threshold."""

  has_return_statement: bool = False
  """True if a `return` was seen directly in this frame's region."""

  @property
  def is_handler(self) -> bool:
    """True if the frame was pushed for a recognized intent handler body."""
    return is_handler_event(self.event)
