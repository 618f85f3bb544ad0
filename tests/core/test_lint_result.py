"""
Tests for the Violation and LintResult models.
"""

from convlint.core.result import LintResult, Violation


def test_violation_format():
  v = Violation(rule="must-return-response", message="Boom.", path="app.py", line=3, column=4)
  assert v.format() == "app.py:3:4: Boom. [must-return-response]"


def test_violation_format_without_path():
  v = Violation(rule="r", message="m")
  assert v.format() == "<string>:1:0: m [r]"


def test_merge_combines_results():
  first = LintResult(violations=[Violation(rule="r", message="a")], files_checked=1)
  second = LintResult(errors=["bad.py: Parse Error"], success=False, files_checked=2)

  first.merge(second)

  assert first.has_violations
  assert first.errors == ["bad.py: Parse Error"]
  assert first.success is False
  assert first.files_checked == 3


def test_empty_result():
  result = LintResult()
  assert result.success
  assert not result.has_violations
