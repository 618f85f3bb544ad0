"""
convlint Package.

A static analyser for conversational fulfillment code written against an
Actions on Google style client library. It checks intent handlers for missing
responses, too many simple responses, an invalid first response item and
promises that are not returned.

Usage
-----

Simple String Linting
^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import convlint
    code = '''
    app = dialogflow()

    @app.intent("welcome")
    def welcome(conv):
      pass
    '''
    result = convlint.lint(code)
    for violation in result.violations:
        print(violation.format())
    # <string>:5:4: Must return a response from the intent handler. [must-return-response]

Advanced Usage (Lint Engine)
^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from convlint import LintConfig, LintEngine

    config = LintConfig(rules=["at-most-two-simple-responses"], max_simple_responses=3)
    engine = LintEngine(config=config)
    res = engine.lint_path("fulfillment/")

    if not res.success:
        print(f"Errors: {res.errors}")
"""

from typing import Any, List, Optional

from convlint.config import LintConfig
from convlint.core.engine import LintEngine
from convlint.core.result import LintResult, Violation
from convlint.errors import ConfigError, ConvlintError, ScopeInvariantError

__version__ = "0.1.0"


def lint(code: str, rules: Optional[List[str]] = None, **overrides: Any) -> LintResult:
  """
  Lints a string of Python code.

  This is a high-level convenience wrapper around the `LintEngine`. It does not
  read pyproject.toml; configuration is built from the arguments alone.

  Args:
      code (str): The source code to check.
      rules (List[str], optional): Rule identifiers to run. Defaults to all rules.
      **overrides: Further `LintConfig` fields (e.g. ``max_simple_responses=3``).

  Returns:
      LintResult: The violations found.

  Raises:
      ConfigError: If the settings are invalid.
  """
  settings = dict(overrides)
  if rules is not None:
    settings["rules"] = rules
  try:
    config = LintConfig(**settings)
  except ValueError as e:
    raise ConfigError(f"Configuration validation failed: {e}") from e

  engine = LintEngine(config=config)
  return engine.lint_code(code)


__all__ = [
  "ConfigError",
  "ConvlintError",
  "LintConfig",
  "LintEngine",
  "LintResult",
  "ScopeInvariantError",
  "Violation",
  "lint",
  "__version__",
]
