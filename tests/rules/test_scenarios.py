"""
End-to-end scenarios running all rules through the engine.
"""

from convlint.config import LintConfig
from convlint.core.engine import LintEngine


def lint(code: str, **settings):
  return LintEngine(config=LintConfig(**settings)).lint_code(code)


def test_three_sequential_responses():
  result = lint("conv.ask('1')\nconv.ask('2')\nconv.ask('3')\n", rules=["at-most-two-simple-responses"])
  assert len(result.violations) == 1
  assert result.violations[0].line == 3


def test_returning_branch_does_not_accumulate():
  code = """
def handler(conv):
  if a:
    conv.ask("1")
    conv.ask("2")
    return
  conv.ask("3")
"""
  assert lint(code, rules=["at-most-two-simple-responses"]).violations == []


def test_handler_without_response():
  code = "app = dialogflow()\n\n@app.intent('a')\ndef a(conv):\n  x = 1\n"
  result = lint(code, rules=["must-return-response"])
  assert len(result.violations) == 1


def test_handler_with_uncertain_call_is_not_reported():
  code = "app = dialogflow()\n\n@app.intent('a')\ndef a(conv):\n  respond(conv)\n"
  assert lint(code, rules=["must-return-response"]).violations == []


def test_clean_fulfillment():
  code = """
app = dialogflow()

@app.intent("Default Welcome Intent")
def welcome(conv):
  if conv.user.last_seen:
    conv.ask("Welcome back!")
  else:
    conv.ask("Hi there!", "I can tell you a fact.")
  conv.ask(Suggestions(["Yes", "No"]))

@app.intent("Quote")
def quote(conv):
  return fetch(URL).then(lambda data: conv.close(data.quote))

app.intent("Goodbye", lambda conv: conv.close("Bye"))
"""
  result = lint(code)
  assert result.success
  assert result.violations == []
