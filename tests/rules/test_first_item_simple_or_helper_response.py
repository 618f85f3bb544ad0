"""
Tests for the first-item-simple-or-helper-response rule.
"""

from typing import List

import pytest

from convlint.config import LintConfig
from convlint.core.context import LintContext
from convlint.core.result import Violation
from convlint.rules import FirstItemSimpleOrHelperResponse

MESSAGE = "First item must be a simple response or a helper"


def check(code: str) -> List[Violation]:
  context = LintContext.from_source(code)
  rule = FirstItemSimpleOrHelperResponse(context, LintConfig())
  return rule.run()


VALID = [
  "conv.ask('Hello World')",
  "conv.ask(SimpleResponse('Hello World'))\nconv.ask(Suggestions([1, 2, 3]))\n",
  "conv.close('Hm, I can not find details for selected_sku_id. Good bye.')",
  "conv.ask('Hello ' + 'world')",
  "x = 'Hello World'\nconv.ask(x)\n",
  """
app = dialogflow()

@app.intent("Unrecognized Deep Link Fallback")
def fallback(conv):
  response = util.format(responses.general.unhandled, conv.query)
  suggestions = [c.suggestion for c in responses.categories]
  conv.ask(response, Suggestions(suggestions))
""",
  """
app = dialogflow()

@app.intent("Unrecognized Deep Link Fallback")
def fallback(conv):
  response = util.format(responses.general.unhandled, conv.query)
  self.conv.close(*response)
""",
  "app = dialogflow()\napp.intent('foo', lambda conv: conv.ask(some_func()))\n",
  """
app = dialogflow()

@app.intent("foo")
def foo(conv):
  conv.ask(SignIn())
  conv.ask(BasicCard())
""",
  # every function body opens a new turn
  """
def first(conv):
  conv.ask("Hello")

def second(conv):
  conv.ask("Hi")
  conv.ask(BasicCard())
""",
]


@pytest.mark.parametrize("code", VALID)
def test_valid(code):
  assert check(code) == []


def test_card_before_text():
  violations = check("conv.ask(BasicCard({}))\nconv.ask('Hello')\n")
  assert len(violations) == 1
  assert violations[0].message == MESSAGE
  assert (violations[0].line, violations[0].column) == (1, 0)
  assert violations[0].end_column == len("conv.ask")


def test_card_first_in_function():
  violations = check("def foo():\n  conv.ask(BasicCard({}))\n")
  assert len(violations) == 1
  assert violations[0].line == 2


def test_response_without_arguments():
  assert len(check("conv.close()")) == 1


def test_nested_function_restores_outer_turn():
  code = """
def outer(conv):
  def inner():
    conv.ask("inner")
  conv.ask(BasicCard())
"""
  violations = check(code)
  assert len(violations) == 1
  assert violations[0].line == 5
