"""
Lint Engine.

Orchestrates the analysis of source code:

1.  **Parsing**: `libcst.parse_module` wrapped in a `MetadataWrapper`.
2.  **Context**: One `LintContext` per file (scope, parent and position metadata).
3.  **Rule Passes**: Each enabled rule runs as an independent visitor pass with
    its own tracker, so a failure in one rule never corrupts another.

A syntax error aborts the file; a broken tracker invariant aborts the rule pass.
Both are recorded in `LintResult.errors` and clear `LintResult.success`.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import libcst as cst

from convlint.config import LintConfig
from convlint.core.context import LintContext
from convlint.core.result import LintResult
from convlint.errors import ScopeInvariantError
from convlint.rules import get_rule


class LintEngine:
  """
  The main analysis unit.

  Attributes:
      config (LintConfig): The active configuration.
  """

  def __init__(self, config: Optional[LintConfig] = None, logger: Optional[logging.Logger] = None):
    """
    Initializes the Engine.

    Args:
        config (LintConfig, optional): The runtime configuration. Loaded from
            the nearest pyproject.toml if None.
        logger (logging.Logger, optional): Logger injected into contexts, rules
            and trackers.
    """
    self.config = config or LintConfig.load()
    self._logger = logger or logging.getLogger(__name__)

  def parse(self, code: str) -> cst.Module:
    """
    Parses source string into a LibCST Module.

    Args:
        code (str): Python source code.

    Returns:
        cst.Module: The parsed syntax tree.

    Raises:
        libcst.ParserSyntaxError: If the input code is invalid Python.
    """
    return cst.parse_module(code)

  def lint_code(self, code: str, path: Optional[Union[str, Path]] = None) -> LintResult:
    """
    Runs all enabled rules over a piece of source code.

    Args:
        code (str): Python source code.
        path (str | Path, optional): Where the code came from, for reports.

    Returns:
        LintResult: Violations and errors of this file.
    """
    source_path = Path(path) if path is not None else None
    label = str(source_path) if source_path else "<string>"
    result = LintResult(files_checked=1)

    try:
      tree = self.parse(code)
    except cst.ParserSyntaxError as e:
      self._logger.debug("Failed to parse %s", label)
      result.errors.append(f"{label}: Parse Error: {e}")
      result.success = False
      return result

    context = LintContext(cst.MetadataWrapper(tree), path=source_path, logger=self._logger)

    for rule_id in self.config.rules:
      rule = get_rule(rule_id)(context, self.config, self._logger)
      try:
        result.violations.extend(rule.run())
      except ScopeInvariantError as e:
        self._logger.debug("Rule %s aborted on %s", rule_id, label)
        result.errors.append(f"{label}: {rule_id}: {e}")
        result.success = False

    result.violations.sort(key=lambda v: (v.line, v.column))
    return result

  def lint_path(self, path: Union[str, Path]) -> LintResult:
    """
    Lints a single file, or every ``*.py`` file below a directory.

    Args:
        path (str | Path): File or directory.

    Returns:
        LintResult: The combined result of all files.
    """
    target = Path(path)
    files: List[Path] = sorted(target.rglob("*.py")) if target.is_dir() else [target]

    result = LintResult()
    for file_path in files:
      self._logger.debug("Linting %s", file_path)
      try:
        code = file_path.read_text(encoding="utf-8")
      except (OSError, UnicodeDecodeError) as e:
        result.errors.append(f"{file_path}: Read Error: {e}")
        result.success = False
        continue
      result.merge(self.lint_code(code, path=file_path))
    return result
