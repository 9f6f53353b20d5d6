"""
Directive Rewriter.

This module provides the ``DirectiveRewriter``, a single pre-order walk over
the host AST that finds ``@apply`` directives in string literals and template
fragments, allocates a selector for each, and substitutes a reference to the
generated selector in place.

Visitation order follows the host traversal:

1.  Nodes are visited parents first, children in document order.
2.  A template literal's own fragments are processed when the literal is
    entered, before any string nested inside its interpolated expressions.
3.  Nodes produced by the rewrite are never visited again.
"""

import logging
from typing import Callable, Dict, Optional, Set

from tw_apply.core.allocator import SelectorAllocator
from tw_apply.core.detector import detect_directive
from tw_apply.core.nodes import (
  Node,
  child_keys,
  is_node,
  jsx_expression_container,
  node_kind,
  string_literal,
)
from tw_apply.core.segmenter import REFERENCE_IDENTIFIER, segment_fragment, selector_reference
from tw_apply.enums import Dialect, NodeKind

logger = logging.getLogger(__name__)

# Slots where only a string is syntactically valid.
TEXTUAL_SLOTS = frozenset(
  {
    ("ImportDeclaration", "source"),
    ("ExportNamedDeclaration", "source"),
    ("ExportAllDeclaration", "source"),
    ("ImportSpecifier", "imported"),
    ("ExportSpecifier", "local"),
    ("ExportSpecifier", "exported"),
    ("ImportAttribute", "key"),
    ("ImportAttribute", "value"),
    ("TSLiteralType", "literal"),
    ("TSPropertySignature", "key"),
    ("TSMethodSignature", "key"),
    ("TSEnumMember", "id"),
    ("TSModuleDeclaration", "id"),
    ("TSExternalModuleReference", "expression"),
  }
)

# Owners whose string ``key`` must become computed to hold an expression.
KEYED_OWNERS = frozenset(
  {
    "ObjectProperty",
    "ObjectMethod",
    "ClassProperty",
    "ClassMethod",
    "ClassAccessorProperty",
    "Property",
    "PropertyDefinition",
    "MethodDefinition",
  }
)


class DirectiveRewriter:
  """
  Walks a host AST and rewrites directive-bearing literals in place.

  Attributes:
      allocator (SelectorAllocator): Counter and rule list for this invocation.
      dialect (Dialect): Naming convention used for string nodes it creates.
  """

  def __init__(self, allocator: Optional[SelectorAllocator] = None, dialect: Dialect = Dialect.BABEL) -> None:
    self.allocator = allocator or SelectorAllocator()
    self.dialect = dialect
    self._produced: Set[int] = set()
    self._handlers: Dict[NodeKind, Callable[[Node], None]] = {
      NodeKind.TEMPLATE_LITERAL: self._rewrite_template,
    }

  def rewrite(self, root: Node) -> Node:
    """
    Runs the traversal over the whole tree.

    Args:
        root (Node): ``File`` or ``Program`` root. Mutated in place.

    Returns:
        Node: The same root.
    """
    self._walk(root)
    return root

  def _walk(self, node: Node) -> None:
    handler = self._handlers.get(node_kind(node))
    if handler:
      handler(node)

    for key in child_keys(node):
      value = node[key]
      if isinstance(value, list):
        for index, item in enumerate(value):
          if is_node(item):
            value[index] = self._visit_child(item, node, key)
      else:
        node[key] = self._visit_child(value, node, key)

  def _visit_child(self, child: Node, parent: Node, key: str) -> Node:
    if id(child) in self._produced:
      return child
    if node_kind(child) is NodeKind.STRING_LITERAL:
      return self._rewrite_string(child, parent, key)
    self._walk(child)
    return child

  def _rewrite_string(self, node: Node, parent: Node, key: str) -> Node:
    """
    Replaces a directive-bearing string literal according to its slot.

    Args:
        node (Node): The string literal.
        parent (Node): Node owning the slot.
        key (str): Field of ``parent`` holding ``node``.

    Returns:
        Node: The replacement, or ``node`` itself when it holds no directive.
    """
    body = detect_directive(node["value"])
    if body is None:
      return node

    selector = self.allocator.allocate(body)
    logger.debug(f"Extracted '{body}' into selector '{selector}'")

    parent_type = parent["type"]
    if (parent_type, key) in TEXTUAL_SLOTS:
      replacement = string_literal(f"{REFERENCE_IDENTIFIER}.{selector}", self.dialect)
    else:
      replacement = selector_reference(selector)
      if parent_type == "JSXAttribute":
        replacement = jsx_expression_container(replacement)
      elif key == "key" and parent_type in KEYED_OWNERS:
        parent["computed"] = True

    self._produced.add(id(replacement))
    return replacement

  def _rewrite_template(self, node: Node) -> None:
    """
    Rebuilds a template literal's fragments and expressions.

    Each directive fragment becomes left fragment, reference, right fragment.
    The expression that followed the original fragment is re-attached after
    the right fragment, keeping the alternating layout.

    Args:
        node (Node): The ``TemplateLiteral``. Mutated in place.
    """
    original_expressions = node["expressions"]
    quasis = []
    expressions = []
    changed = False

    for index, fragment in enumerate(node["quasis"]):
      body = detect_directive(fragment["value"]["raw"])

      if body is None:
        quasis.append(fragment)
      else:
        selector = self.allocator.allocate(body)
        logger.debug(f"Extracted template fragment '{body}' into selector '{selector}'")
        segments = segment_fragment(fragment, selector)
        quasis.append(segments.left)
        expressions.append(segments.reference)
        quasis.append(segments.right)
        self._produced.add(id(segments.reference))
        changed = True

      if index < len(original_expressions):
        expressions.append(original_expressions[index])

    if changed:
      node["quasis"] = quasis
      node["expressions"] = expressions
