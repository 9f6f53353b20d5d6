"""
Console and Logging Utilities.

The CLI prints through one themed ``rich`` console. Standard ``logging``
records (including the per-directive DEBUG lines of the rewriter) are rendered
on that same console by a ``RichHandler`` installed on the root logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "warning": "yellow",
    "error": "bold red",
    "path": "bold blue",
    "selector": "bold magenta",
  }
)

console = Console(theme=_THEME)


def configure_logging(verbose: bool = False) -> RichHandler:
  """
  Binds the root logger to ``console``.

  Any Rich handler installed earlier is replaced, so calling this again (as the
  CLI does once its flags are parsed) never duplicates output.

  Args:
      verbose (bool): True to show DEBUG records.

  Returns:
      RichHandler: The handler now attached to the root logger.
  """
  root_logger = logging.getLogger()
  for handler in [h for h in root_logger.handlers if isinstance(h, RichHandler)]:
    root_logger.removeHandler(handler)

  handler = RichHandler(console=console, show_time=False, show_path=False, markup=True, rich_tracebacks=True)
  root_logger.addHandler(handler)
  set_verbose(verbose)
  return handler


def set_verbose(verbose: bool) -> None:
  logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def log_info(msg: str) -> None:
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  logging.error(f"❌ {msg}", extra={"markup": True})


configure_logging()
