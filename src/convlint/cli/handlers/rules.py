"""
Rules Command Handler.

Lists the registered rules and their descriptions.
"""

from rich.table import Table

from convlint.config import DEFAULT_RULES
from convlint.rules import available_rules, get_rule
from convlint.utils.console import console


def handle_rules() -> int:
  """
  Prints a table of all rules.

  Returns:
      int: Exit code (always 0).
  """
  table = Table(title="Available Rules")
  table.add_column("Rule", style="rule")
  table.add_column("Default", justify="center")
  table.add_column("Description", style="dim")

  for rule_id in available_rules():
    rule = get_rule(rule_id)
    enabled = "yes" if rule_id in DEFAULT_RULES else "no"
    table.add_row(rule_id, enabled, rule.description)

  console.print(table)
  return 0
