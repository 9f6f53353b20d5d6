"""
Orchestration Engine for the tw-apply macro.

This module provides the ``MacroEngine``, the driver invoked once per source
file. The pipeline is strictly linear and has no partial-success state:

1.  **Validate**: The configuration is checked and the source filename must be
    present, before the AST is touched.
2.  **Traverse & Rewrite**: The ``DirectiveRewriter`` replaces every directive
    with a reference to a generated selector, filling the rule list.
3.  **Write Stylesheet**: The rules are written next to the source file.
4.  **Inject Import**: The stylesheet import becomes the program's first
    statement, even when no directive was found.

A failure in step 3 leaves the in-memory AST already rewritten; the caller
must discard it.
"""

import logging
import os
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field

from tw_apply.config import MacroConfig
from tw_apply.core.allocator import SelectorAllocator
from tw_apply.core.emitter import (
  PathLike,
  inject_stylesheet_import,
  render_stylesheet,
  stylesheet_basename,
  stylesheet_path,
  write_stylesheet,
)
from tw_apply.core.nodes import Node, detect_dialect, get_program
from tw_apply.core.rewriter import DirectiveRewriter
from tw_apply.errors import MissingFilenameError

logger = logging.getLogger(__name__)


class MacroResult(BaseModel):
  """
  Outcome of a single successful invocation.
  """

  filename: str = Field(description="The source file the AST belongs to.")
  stylesheet_path: str = Field(description="Path of the written stylesheet.")
  stylesheet_basename: str = Field(description="File name referenced by the injected import.")
  rules: List[str] = Field(default_factory=list, description="Generated rules in allocation order.")

  @property
  def stylesheet(self) -> str:
    """
    The stylesheet text as written.

    Returns:
        str: Concatenation of all rules.
    """
    return render_stylesheet(self.rules)

  @property
  def selector_count(self) -> int:
    return len(self.rules)


class MacroEngine:
  """
  The per-file transformation unit.

  An engine instance holds only the validated configuration; the counter and
  rule list are created fresh for every ``run``, so one engine may serve many
  files.
  """

  def __init__(self, config: Optional[MacroConfig] = None) -> None:
    """
    Initializes the Engine.

    Args:
        config (MacroConfig, optional): Validated options. Defaults to no suffix.
    """
    self.config = config or MacroConfig()

  def run(self, ast_root: Node, filename: Optional[PathLike]) -> MacroResult:
    """
    Executes the full pipeline on one file.

    Args:
        ast_root (Node): ``File`` or ``Program`` root. Mutated in place.
        filename (PathLike): Path of the source file the AST was parsed from.

    Returns:
        MacroResult: Paths and rules produced.

    Raises:
        MissingFilenameError: If ``filename`` is empty.
        OSError: If the stylesheet cannot be written.
    """
    if not filename:
      raise MissingFilenameError()
    source = os.fspath(filename)
    # Rejects unsupported roots before any mutation
    get_program(ast_root)

    css_basename = stylesheet_basename(source, self.config.file_suffix)
    css_path = stylesheet_path(source, self.config.file_suffix)

    dialect = detect_dialect(ast_root)
    allocator = SelectorAllocator()
    DirectiveRewriter(allocator, dialect).rewrite(ast_root)
    logger.debug(f"{source}: {allocator.counter} directive(s) extracted")

    write_stylesheet(css_path, allocator.rules)
    inject_stylesheet_import(ast_root, css_basename, dialect)
    logger.debug(f"{source}: wrote {css_path}")

    return MacroResult(
      filename=source,
      stylesheet_path=css_path,
      stylesheet_basename=css_basename,
      rules=list(allocator.rules),
    )


def apply_macro(
  ast_root: Node,
  filename: Optional[PathLike],
  options: Optional[Mapping[str, Any]] = None,
) -> MacroResult:
  """
  Host-facing entry point taking raw, unvalidated options.

  Args:
      ast_root (Node): ``File`` or ``Program`` root. Mutated in place.
      filename (PathLike): Source file path.
      options (Optional[Mapping]): Raw options such as ``{"fileSuffix": ".local"}``.

  Returns:
      MacroResult: Paths and rules produced.

  Raises:
      ConfigurationError: If an option is invalid. Raised before anything else.
      MissingFilenameError: If ``filename`` is empty.
      OSError: If the stylesheet cannot be written.
  """
  config = MacroConfig.from_options(options)
  return MacroEngine(config).run(ast_root, filename)
