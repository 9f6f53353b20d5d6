"""
Main Entry Point for the tw-apply CLI.

This module handles argument parsing and dispatches to the command handlers
defined in ``tw_apply.cli.handlers``.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from tw_apply import __version__
from tw_apply.cli import handlers
from tw_apply.utils.console import configure_logging


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="tw-apply: extract inline @apply directives into CSS modules")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Log every extracted directive")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: TRANSFORM ---
  cmd_tf = subparsers.add_parser("transform", help="Rewrite a JSON AST and write its stylesheet")
  cmd_tf.add_argument("path", type=Path, help="JSON AST file (e.g. Button.tsx.json) or directory")
  cmd_tf.add_argument("--out", type=Path, help="Output destination for rewritten ASTs (file or dir)")
  cmd_tf.add_argument(
    "--filename",
    type=Path,
    default=None,
    help="Source file the AST was parsed from (default: PATH without '.json')",
  )
  cmd_tf.add_argument("--file-suffix", default=None, help="Stylesheet name suffix (overrides config)")

  # --- Command: STYLESHEET-PATH ---
  cmd_path = subparsers.add_parser("stylesheet-path", help="Print the stylesheet path for a source file")
  cmd_path.add_argument("filename", help="Source file path")
  cmd_path.add_argument("--file-suffix", default=None, help="Stylesheet name suffix (overrides config)")

  args = parser.parse_args(argv)
  configure_logging(verbose=args.verbose)

  if args.command == "transform":
    return handlers.handle_transform(args.path, args.out, args.filename, args.file_suffix)

  elif args.command == "stylesheet-path":
    return handlers.handle_stylesheet_path(args.filename, args.file_suffix)

  return 1
