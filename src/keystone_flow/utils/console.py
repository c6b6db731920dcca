"""
Diagnostics Output.

Everything the package reports goes through the ``keystone_flow`` logger;
the core modules log on children of it via ``logging.getLogger(__name__)``.
The root logger is never touched, so importing the package does not change
the host's logging setup.

Nothing is rendered until a host (or a test) opts in with
`configure_logging`, which attaches a `rich` handler to the package logger
and can point it at any Console, e.g. a recording one.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

PACKAGE_LOGGER = "keystone_flow"

THEME = Theme(
  {
    "info": "dim cyan",
    "warning": "yellow",
    "path": "bold blue",
    "code": "bold magenta",
  }
)

_logger = logging.getLogger(PACKAGE_LOGGER)
_logger.addHandler(logging.NullHandler())

_handler: Optional[RichHandler] = None
_previous_level: int = logging.NOTSET


def configure_logging(console: Optional[Console] = None, level: int = logging.INFO) -> RichHandler:
  """
  Renders package diagnostics through rich.

  Calling it again replaces the handler installed by the previous call.

  Args:
      console: Destination console. Defaults to a themed stderr console.
      level: Threshold for the package logger (``logging.DEBUG`` adds a
          trace line per rewrite).

  Returns:
      RichHandler: The installed handler.
  """
  global _handler, _previous_level

  if _handler is None:
    _previous_level = _logger.level
  else:
    _logger.removeHandler(_handler)

  target = console if console is not None else Console(theme=THEME, stderr=True)
  _handler = RichHandler(
    console=target,
    show_time=False,
    show_path=False,
    markup=True,
    rich_tracebacks=True,
  )
  _logger.addHandler(_handler)
  _logger.setLevel(level)
  return _handler


def reset_logging() -> None:
  """Removes the handler installed by `configure_logging` and restores the logger level."""
  global _handler

  if _handler is None:
    return
  _logger.removeHandler(_handler)
  _logger.setLevel(_previous_level)
  _handler = None


def log_info(msg: str) -> None:
  """
  Logs an informational message on the package logger.

  Args:
      msg (str): The message content. Can include rich markup like [path].
  """
  _logger.info(f"ℹ️  {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """
  Logs a warning on the package logger.

  Args:
      msg (str): The message content.
  """
  _logger.warning(f"⚠️  {msg}", extra={"markup": True})
