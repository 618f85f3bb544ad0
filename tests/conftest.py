"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Parsed-node fixtures for driving scope trackers without a visitor.
- Console isolation for CLI tests.
"""

import sys
from pathlib import Path

import libcst as cst
import pytest

# Add src to path so we can import 'convlint' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from convlint.utils.console import reset_console  # noqa: E402


@pytest.fixture
def if_else_node() -> cst.If:
  """A conditional with an else branch."""
  return cst.parse_statement("if a:\n  pass\nelse:\n  pass\n")


@pytest.fixture
def if_node() -> cst.If:
  """A conditional without an else branch."""
  return cst.parse_statement("if a:\n  pass\n")


@pytest.fixture
def try_node() -> cst.Try:
  """A try-statement with a single except clause."""
  return cst.parse_statement("try:\n  pass\nexcept E:\n  pass\n")


@pytest.fixture
def function_node() -> cst.FunctionDef:
  """A plain function definition."""
  return cst.parse_statement("def handler(conv):\n  pass\n")


@pytest.fixture(autouse=True)
def clean_console():
  """Restores the default console after tests that inject a capture console."""
  yield
  reset_console()
