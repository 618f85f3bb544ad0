"""
Check Command Handler.

Lints source files and renders the violations as a table or as JSON.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.table import Table

from convlint.config import LintConfig
from convlint.core.engine import LintEngine
from convlint.core.result import LintResult
from convlint.errors import ConfigError
from convlint.utils.console import console, log_error, log_info, log_success


def handle_check(
  path: Path,
  rules: Optional[List[str]] = None,
  max_simple_responses: Optional[int] = None,
  settings: Optional[Dict[str, Any]] = None,
  json_mode: bool = False,
) -> int:
  """
  Lints a file or directory.

  Args:
      path: Input source file or directory.
      rules: Rules to run. Overrides the TOML configuration.
      max_simple_responses: Threshold override.
      settings: Additional ``key=value`` overrides.
      json_mode: If True, output JSON to stdout and suppress Rich output.

  Returns:
      int: Exit code (0 if clean, 1 if violations or errors were found).
  """
  if not path.exists():
    log_error(f"Path not found: {path}")
    return 1

  search_dir = path if path.is_dir() else path.parent
  try:
    config = LintConfig.load(
      rules=rules,
      max_simple_responses=max_simple_responses,
      overrides=settings,
      search_path=search_dir,
    )
  except ConfigError as e:
    log_error(str(e))
    return 1

  if not json_mode:
    log_info(f"Checking [path]{path}[/path] with rules: {', '.join(config.rules)}")

  engine = LintEngine(config=config)
  result = engine.lint_path(path)

  for error in result.errors:
    log_error(error)

  if json_mode:
    output_list = [v.model_dump() for v in result.violations]
    print(json.dumps(output_list, indent=2))
    return 0 if _is_clean(result) else 1

  if result.violations:
    render_violations(result)
  else:
    log_success(f"No violations in {result.files_checked} file(s).")

  return 0 if _is_clean(result) else 1


def render_violations(result: LintResult) -> None:
  """
  Prints the violations as a Rich table followed by a summary line.

  Args:
      result: The lint result to render.
  """
  table = Table(title="Violations")
  table.add_column("Location", style="path")
  table.add_column("Rule", style="rule")
  table.add_column("Message")

  for v in result.violations:
    table.add_row(f"{v.path or '<string>'}:{v.line}:{v.column}", v.rule, v.message)

  console.print(table)
  console.print(f"[bold]{len(result.violations)} violation(s)[/bold] in {result.files_checked} file(s).")


def _is_clean(result: LintResult) -> bool:
  return result.success and not result.has_violations
