"""
Tests for the ``rules`` command and the CLI entry point.
"""

import pytest
from rich.console import Console

from convlint import __version__
from convlint.cli.__main__ import main
from convlint.rules import available_rules
from convlint.utils.console import set_console


def test_rules_lists_every_rule():
  buffer = Console(record=True, width=200)
  set_console(buffer)

  assert main(["rules"]) == 0

  output = buffer.export_text()
  for rule_id in available_rules():
    assert rule_id in output


def test_version(capsys):
  with pytest.raises(SystemExit) as exc:
    main(["--version"])
  assert exc.value.code == 0
  assert __version__ in capsys.readouterr().out


def test_command_is_required():
  with pytest.raises(SystemExit):
    main([])
