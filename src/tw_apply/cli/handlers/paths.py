"""
Stylesheet Path Command Handler.

Prints where the stylesheet for a given source file would be written, using
the same configuration resolution as ``transform``.
"""

from pathlib import Path
from typing import Optional

from tw_apply.config import MacroConfig
from tw_apply.core.emitter import stylesheet_path
from tw_apply.errors import ConfigurationError
from tw_apply.utils.console import log_error


def handle_stylesheet_path(filename: str, file_suffix: Optional[str]) -> int:
  """
  Handles the 'stylesheet-path' command.

  Args:
      filename: Source file path (need not exist).
      file_suffix: Override for the configured suffix.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  try:
    config = MacroConfig.load(file_suffix=file_suffix, search_path=Path(filename).parent)
  except ConfigurationError as e:
    log_error(str(e))
    return 1

  print(stylesheet_path(filename, config.file_suffix))
  return 0
