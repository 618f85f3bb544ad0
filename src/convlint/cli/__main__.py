"""
Main Entry Point for convlint CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `convlint.cli.commands`.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from convlint import __version__
from convlint.cli import commands
from convlint.config import parse_cli_key_values
from convlint.utils.console import console


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="convlint: Linter for conversational fulfillment code")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output of the scope trackers")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CHECK ---
  cmd_check = subparsers.add_parser("check", help="Lint a Python file or directory")
  cmd_check.add_argument("path", type=Path, help="Input source file or directory")
  cmd_check.add_argument("--rules", nargs="+", default=None, help="Rules to run (default: from toml, else all)")
  cmd_check.add_argument("--max-simple-responses", type=int, default=None, help="Simple responses allowed per path")
  cmd_check.add_argument("--json", action="store_true", help="Print violations as JSON to stdout")
  cmd_check.add_argument(
    "--config",
    nargs="*",
    help="Configuration overrides in key=value format (e.g. conversation_names=conv,c)",
  )

  # --- Command: RULES ---
  subparsers.add_parser("rules", help="List the available rules")

  args = parser.parse_args(argv)

  if args.verbose:
    console.set_level(logging.DEBUG)

  if args.command == "check":
    settings = parse_cli_key_values(args.config)
    return commands.handle_check(args.path, args.rules, args.max_simple_responses, settings, args.json)

  elif args.command == "rules":
    return commands.handle_rules()

  return 0


if __name__ == "__main__":
  sys.exit(main())
