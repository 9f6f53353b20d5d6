"""
Transform Command Handler.

This module implements the logic for the `tw-apply transform` command.
It orchestrates:
1. Configuration loading (project files + CLI overrides).
2. Reading JSON ASTs produced by a JavaScript parser.
3. Running the macro engine, which writes each stylesheet.
4. Writing the rewritten ASTs and reporting a batch summary.

AST files are named after their source file with a trailing ``.json``
(``Button.tsx.json`` holds the AST of ``Button.tsx``), which is how the source
filename is derived when it is not given explicitly.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from rich.table import Table

from tw_apply.config import MacroConfig
from tw_apply.core.engine import MacroEngine, MacroResult
from tw_apply.errors import ConfigurationError, TwApplyError
from tw_apply.utils.console import console, log_error, log_info, log_success, log_warning

SOURCE_EXTENSIONS = frozenset({".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"})


def source_filename_for(ast_path: Path) -> Path:
  """
  Derives the source filename from an AST file path.

  Args:
      ast_path: e.g. ``src/Button.tsx.json``.

  Returns:
      Path: e.g. ``src/Button.tsx``.
  """
  if ast_path.suffix == ".json":
    return ast_path.with_suffix("")
  return ast_path


def handle_transform(
  input_path: Path,
  output_path: Optional[Path],
  filename: Optional[Path],
  file_suffix: Optional[str],
) -> int:
  """
  Handles the 'transform' command execution.

  Args:
      input_path: JSON AST file, or a directory searched for ``*.<ext>.json``.
      output_path: Where rewritten ASTs go (file, or directory in batch mode).
      filename: Source filename override (single file only).
      file_suffix: Override for the configured stylesheet suffix.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = MacroConfig.load(
      file_suffix=file_suffix,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ConfigurationError as e:
    log_error(str(e))
    return 1

  engine = MacroEngine(config)

  if input_path.is_file():
    source = filename or source_filename_for(input_path)
    try:
      _transform_single_file(input_path, output_path, source, engine)
    except (TwApplyError, OSError, ValueError) as e:
      log_error(f"Failed to transform {input_path}: {e}")
      return 1
    return 0

  if not output_path:
    log_error("Directory transformation requires --out destination directory.")
    return 1
  if filename:
    log_warning("--filename is ignored in directory mode.")

  ast_files = sorted(p for p in input_path.rglob("*.json") if Path(p.stem).suffix in SOURCE_EXTENSIONS)
  if not ast_files:
    log_warning(f"No AST files found in {input_path}")
    return 0

  log_info(f"Processing {len(ast_files)} files from {input_path}...")
  failures: Dict[str, str] = {}
  results: Dict[str, MacroResult] = {}

  for ast_file in ast_files:
    rel_path = ast_file.relative_to(input_path)
    try:
      results[str(rel_path)] = _transform_single_file(
        ast_file, output_path / rel_path, source_filename_for(ast_file), engine
      )
    except (TwApplyError, OSError, ValueError) as e:
      failures[str(rel_path)] = str(e)

  _print_batch_summary(results, failures)
  return 1 if failures else 0


def _transform_single_file(
  ast_path: Path,
  output_path: Optional[Path],
  source_filename: Path,
  engine: MacroEngine,
) -> MacroResult:
  """
  Runs the macro on one AST file.

  Args:
      ast_path: JSON AST file.
      output_path: Destination for the rewritten AST; stdout when None.
      source_filename: Path of the source file the AST was parsed from.
      engine: Configured engine.

  Returns:
      MacroResult: Paths and rules produced.
  """
  with open(ast_path, "rt", encoding="utf-8") as f:
    ast = json.load(f)

  result = engine.run(ast, source_filename)
  rendered = json.dumps(ast, indent=2)

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(rendered)
    log_success(
      f"Transformed: [path]{ast_path}[/path] -> [path]{output_path}[/path] "
      f"([selector]{result.selector_count}[/selector] selectors in [path]{result.stylesheet_path}[/path])"
    )
  else:
    print(rendered)

  return result


def _print_batch_summary(results: Dict[str, MacroResult], failures: Dict[str, str]) -> None:
  """
  Renders a summary table of the batch to the console.

  Args:
      results: Successful files mapped to their results.
      failures: Failed files mapped to the error message.
  """
  total = len(results) + len(failures)
  if not failures:
    log_success(f"Batch Complete: {len(results)}/{total} files transformed.")
    return

  table = Table(title="Transform Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for name, message in failures.items():
    table.add_row(name, "❌ Failed", message)

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {len(results)} Passed, {len(failures)} Failed.")
