"""
Data structures representing the output of the lint pipeline.

This module defines the `Violation` and `LintResult` Pydantic models, which
encapsulate the diagnostics reported by rules and any errors that aborted the
analysis of a file.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class Violation(BaseModel):
  """
  A single diagnostic reported by a rule.
  """

  rule: str = Field(description="Identifier of the rule that reported the violation.")
  message: str = Field(description="Human readable description of the problem.")
  path: Optional[str] = Field(default=None, description="Source file, if the code came from disk.")
  line: int = Field(default=1, description="1-based start line.")
  column: int = Field(default=0, description="0-based start column.")
  end_line: int = Field(default=1, description="1-based end line.")
  end_column: int = Field(default=0, description="0-based end column.")

  def format(self) -> str:
    """
    Renders the violation in the conventional ``path:line:col`` form.

    Returns:
        str: e.g. ``handlers.py:4:2: At most two simple responses are allowed. [at-most-two-simple-responses]``
    """
    location = f"{self.path or '<string>'}:{self.line}:{self.column}"
    return f"{location}: {self.message} [{self.rule}]"


class LintResult(BaseModel):
  """
  Container for the results of a lint run over one or more files.
  """

  violations: List[Violation] = Field(default_factory=list, description="Diagnostics, ordered by position within each file.")
  errors: List[str] = Field(default_factory=list, description="Errors that aborted a file or rule pass.")
  success: bool = Field(default=True, description="False if any file or rule pass was aborted.")
  files_checked: int = Field(default=0, description="Number of files analysed.")

  @property
  def has_violations(self) -> bool:
    """
    Check if any rule reported a violation.

    Returns:
        True if one or more violations are present.
    """
    return len(self.violations) > 0

  def merge(self, other: "LintResult") -> None:
    """
    Folds the result of another run into this one.

    Args:
        other: The result to absorb.
    """
    self.violations.extend(other.violations)
    self.errors.extend(other.errors)
    self.success = self.success and other.success
    self.files_checked += other.files_checked
