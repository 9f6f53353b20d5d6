"""
Enumerations for tw-apply.

This module defines the closed sets of tags used to dispatch over host AST
nodes during the rewrite traversal.
"""

from enum import Enum


class NodeKind(str, Enum):
  """
  Categorization of host AST nodes relevant to directive extraction.

  Everything that is not a string literal, template literal or template
  fragment is ``OTHER`` and is only walked through.
  """

  STRING_LITERAL = "string_literal"
  TEMPLATE_LITERAL = "template_literal"
  TEMPLATE_FRAGMENT = "template_fragment"
  OTHER = "other"


class Dialect(str, Enum):
  """
  Flavour of the host AST.

  Babel names string nodes ``StringLiteral``; ESTree parsers (esprima, acorn)
  use a ``Literal`` carrying a string value.
  """

  BABEL = "babel"
  ESTREE = "estree"
