"""
Runtime Configuration Store.

`LintConfig` holds the enabled rules and the vocabulary of the analysed client
library (conversation object name, response methods, app factories). Values are
read from the ``[tool.convlint]`` table of the nearest ``pyproject.toml`` and
overridden by CLI arguments.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from convlint.errors import ConfigError
from convlint.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_RULES: List[str] = [
  "must-return-response",
  "at-most-two-simple-responses",
  "first-item-simple-or-helper-response",
  "always-return-promise",
]


class LintConfig(BaseModel):
  """
  Global configuration container for the lint engine.
  """

  rules: List[str] = Field(default_factory=lambda: list(DEFAULT_RULES), description="Rule identifiers to run.")
  max_simple_responses: int = Field(2, ge=0, description="Simple responses allowed on a single path.")
  conversation_names: List[str] = Field(
    default_factory=lambda: ["conv"], description="Identifiers of the conversation object (receiver of responses)."
  )
  response_methods: List[str] = Field(
    default_factory=lambda: ["ask", "close", "json"], description="Conversation methods that emit a response."
  )
  app_factories: List[str] = Field(
    default_factory=lambda: ["dialogflow", "actionssdk"], description="Callables that create a fulfillment app."
  )
  registration_methods: List[str] = Field(
    default_factory=lambda: ["intent", "fallback"], description="App methods that register an intent handler."
  )
  extra_helper_classes: List[str] = Field(
    default_factory=list, description="Additional class names classified as helper responses."
  )

  @field_validator(
    "rules",
    "conversation_names",
    "response_methods",
    "app_factories",
    "registration_methods",
    "extra_helper_classes",
    mode="before",
  )
  @classmethod
  def split_strings(cls, v: Any) -> Any:
    """Accepts a comma separated string wherever a list is expected."""
    if isinstance(v, str):
      return [part.strip() for part in v.split(",") if part.strip()]
    return v

  @field_validator("rules")
  @classmethod
  def validate_rules(cls, v: List[str]) -> List[str]:
    """
    Ensures every rule is registered.

    Args:
        v (List[str]): The requested rule identifiers.

    Returns:
        List[str]: The normalized (lowercase, deduplicated) identifiers.

    Raises:
        ValueError: If a rule is not found in the registry.
    """
    from convlint.rules import available_rules

    known = available_rules()
    cleaned = list(dict.fromkeys(r.lower().strip() for r in v))
    unknown = [r for r in cleaned if r not in known]
    if unknown:
      raise ValueError(f"Unknown rule(s): {unknown}. Available rules: {known}")
    return cleaned

  @classmethod
  def load(
    cls,
    rules: Optional[List[str]] = None,
    max_simple_responses: Optional[int] = None,
    overrides: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "LintConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        rules (Optional[List[str]]): Override for the enabled rules.
        max_simple_responses (Optional[int]): Override for the simple response threshold.
        overrides (Optional[Dict]): Additional ``key=value`` settings from the CLI.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        LintConfig: The fully resolved configuration object.

    Raises:
        ConfigError: If the merged settings fail validation.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    merged: Dict[str, Any] = {**toml_config, **(overrides or {})}
    if rules:
      merged["rules"] = rules
    if max_simple_responses is not None:
      merged["max_simple_responses"] = max_simple_responses

    unknown_keys = sorted(set(merged) - set(cls.model_fields))
    for key in unknown_keys:
      log_warning(f"Ignoring unknown setting '{key}'.")
      merged.pop(key)

    try:
      return cls.model_validate(merged)
    except ValidationError as e:
      raise ConfigError(f"Configuration validation failed: {e}") from e


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.

  Raises:
      ConfigError: If the nearest pyproject.toml is not valid TOML.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e

      tool_section = data.get("tool", {})
      return tool_section.get("convlint", {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, bool, comma separated list, or string). Dashes in
  keys are accepted as underscores.

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid config format: '{item}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    key = key.strip().replace("-", "_")
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    elif "," in val_str:
      final_val = [part.strip() for part in val_str.split(",") if part.strip()]
    else:
      try:
        final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
