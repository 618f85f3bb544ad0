"""
Console Output and Logging Setup.

All user facing output of convlint goes through one Rich console:

*   Result tables printed by the CLI handlers (`console.print`).
*   Records of the standard `logging` module, rendered by a `RichHandler`
    attached to the root logger.

The console is reached through `console`, a stable proxy object, so the
destination can be exchanged at runtime with `set_console` (the CLI tests
inject a recording console to read back rendered tables) without modules
holding a stale reference.

Analysis components (trackers, classifiers, the engine) never import this
module. They log through an injected `logging.Logger`; the handler installed
here only decides where those records are rendered and at which level.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

LINT_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "rule": "bold magenta",
    "violation": "red",
  }
)


def _make_console() -> Console:
  return Console(theme=LINT_THEME)


class _ConsoleProxy:
  """
  Stable handle on the active Rich console.

  Attribute access that the proxy does not define itself is forwarded to the
  active console, so ``console.width`` or ``console.export_text()`` behave as
  on a plain `Console`.
  """

  def __init__(self) -> None:
    self._backend: Console = _make_console()
    self._level = logging.INFO
    self._handler: Optional[RichHandler] = None
    self._install_handler()

  @property
  def backend(self) -> Console:
    """The console that currently receives output."""
    return self._backend

  def use(self, new_console: Console) -> None:
    """
    Routes prints and log records to `new_console`.

    The linter theme is pushed onto the new console so the ``path`` and
    ``rule`` styles resolve on consoles created without it.

    Args:
        new_console: The destination console.
    """
    new_console.push_theme(LINT_THEME)
    self._backend = new_console
    self._install_handler()

  def set_level(self, level: int) -> None:
    """
    Sets the threshold of the root logger (``logging.DEBUG`` for ``--verbose``).

    Args:
        level: A standard logging level.
    """
    self._level = level
    logging.getLogger().setLevel(level)

  def reset(self) -> None:
    """Returns to a fresh stdout console at INFO level."""
    self._backend = _make_console()
    self._level = logging.INFO
    self._install_handler()

  def _install_handler(self) -> None:
    # Only one RichHandler may be attached, bound to the current backend
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    self._handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    root_logger.setLevel(self._level)
    root_logger.addHandler(self._handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """Prints renderables on the active console."""
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Makes `new_console` the destination of all output.

  Args:
      new_console: The console to use, e.g. ``Console(record=True)``.
  """
  console.use(new_console)


def reset_console() -> None:
  """Restores the default stdout console."""
  console.reset()


def get_console() -> Console:
  """
  Returns the console that currently receives output.

  Returns:
      Console: The active Rich console.
  """
  return console.backend


def log_info(msg: str) -> None:
  """
  Logs a progress message. Rich markup such as ``[path]...[/path]`` is allowed.

  Args:
      msg: The message.
  """
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  """Logs a message at the custom SUCCESS level."""
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """Logs a recoverable problem, e.g. an ignored configuration key."""
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs an error that fails the run (unreadable file, syntax error, broken
  tracker invariant, invalid configuration).

  Args:
      msg: The message.
  """
  logging.error(f"❌ {msg}", extra={"markup": True})
