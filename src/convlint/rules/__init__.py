"""
Rule Registry.

Maps rule identifiers to rule classes. The order of registration is the order
in which the engine runs the rules.
"""

from typing import Dict, List, Type

from convlint.errors import ConfigError
from convlint.rules.always_return_promise import AlwaysReturnPromise
from convlint.rules.at_most_two_simple_responses import AtMostTwoSimpleResponses
from convlint.rules.base import LintRule, ScopeEventsMixin
from convlint.rules.first_item_simple_or_helper_response import FirstItemSimpleOrHelperResponse
from convlint.rules.must_return_response import MustReturnResponse

_REGISTRY: Dict[str, Type[LintRule]] = {
  rule.rule_id: rule
  for rule in (
    MustReturnResponse,
    AtMostTwoSimpleResponses,
    FirstItemSimpleOrHelperResponse,
    AlwaysReturnPromise,
  )
}


def available_rules() -> List[str]:
  """
  Returns the identifiers of all registered rules.

  Returns:
      List[str]: Rule identifiers in registration order.
  """
  return list(_REGISTRY)


def get_rule(rule_id: str) -> Type[LintRule]:
  """
  Looks up a rule class.

  Args:
      rule_id: The identifier of the rule.

  Returns:
      Type[LintRule]: The rule class.

  Raises:
      ConfigError: If no rule is registered under `rule_id`.
  """
  try:
    return _REGISTRY[rule_id]
  except KeyError:
    raise ConfigError(f"Unknown rule '{rule_id}'. Available rules: {available_rules()}") from None


__all__ = [
  "AlwaysReturnPromise",
  "AtMostTwoSimpleResponses",
  "FirstItemSimpleOrHelperResponse",
  "LintRule",
  "MustReturnResponse",
  "ScopeEventsMixin",
  "available_rules",
  "get_rule",
]
