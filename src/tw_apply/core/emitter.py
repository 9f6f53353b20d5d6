"""
Artifact Emission.

Handles the two outputs that outlive an invocation:

1.  **Stylesheet**: ``{dir}/{basename}{file_suffix}.module.css`` next to the
    source file, holding the concatenated rules. Any existing file is
    overwritten.
2.  **Import Injection**: ``import __twa__ from "./{stylesheet basename}";``
    placed as the first statement of the program.
"""

import os
from typing import Iterable, Union

from tw_apply.core.nodes import (
  Node,
  get_program,
  identifier,
  import_declaration,
  import_default_specifier,
  string_literal,
)
from tw_apply.core.segmenter import REFERENCE_IDENTIFIER
from tw_apply.enums import Dialect

STYLESHEET_EXTENSION = ".module.css"

PathLike = Union[str, "os.PathLike[str]"]


def stylesheet_basename(filename: PathLike, file_suffix: str = "") -> str:
  """
  Derives the stylesheet's file name from the source file name.

  Args:
      filename (PathLike): Source file path.
      file_suffix (str): Appended to the base name before the extension.

  Returns:
      str: e.g. ``Button.local.module.css`` for ``src/Button.tsx`` and ``.local``.
  """
  stem, _ = os.path.splitext(os.path.basename(os.fspath(filename)))
  return f"{stem}{file_suffix}{STYLESHEET_EXTENSION}"


def stylesheet_path(filename: PathLike, file_suffix: str = "") -> str:
  """
  Derives the stylesheet path, in the same directory as the source.

  Args:
      filename (PathLike): Source file path, absolute or relative.
      file_suffix (str): Appended to the base name before the extension.

  Returns:
      str: Stylesheet path. ``Button.tsx`` maps to ``Button.module.css``.
  """
  directory = os.path.dirname(os.fspath(filename))
  return os.path.join(directory, stylesheet_basename(filename, file_suffix))


def render_stylesheet(rules: Iterable[str]) -> str:
  return "".join(rules)


def write_stylesheet(path: PathLike, rules: Iterable[str]) -> str:
  """
  Writes the stylesheet, replacing any previous content.

  Errors from the file system propagate unchanged.

  Args:
      path (PathLike): Destination path.
      rules (Iterable[str]): Rules in allocation order.

  Returns:
      str: The text written.
  """
  content = render_stylesheet(rules)
  with open(path, "wt", encoding="utf-8") as f:
    f.write(content)
  return content


def build_stylesheet_import(basename: str, dialect: Dialect = Dialect.BABEL) -> Node:
  return import_declaration(
    [import_default_specifier(identifier(REFERENCE_IDENTIFIER))],
    string_literal(f"./{basename}", dialect),
  )


def inject_stylesheet_import(root: Node, basename: str, dialect: Dialect = Dialect.BABEL) -> Node:
  """
  Prepends the stylesheet import to the program body.

  Args:
      root (Node): ``File`` or ``Program`` root.
      basename (str): Stylesheet file name, without directory.
      dialect (Dialect): Naming convention for the source string node.

  Returns:
      Node: The injected declaration.
  """
  declaration = build_stylesheet_import(basename, dialect)
  get_program(root)["body"].insert(0, declaration)
  return declaration
