"""
Host AST Node Helpers.

The macro operates on JSON-compatible trees as emitted by ``@babel/parser``
(``File``/``Program`` roots, ``StringLiteral``) or by ESTree parsers such as
esprima and acorn (``Literal`` with a string value). Nodes are plain ``dict``
objects carrying a ``"type"`` key.

This module provides:

1.  **Builders**: Functions mirroring the host's node factories
    (``identifier``, ``member_expression``, ``template_element``, ...).
2.  **Child Ordering**: A visitor-key table giving the document order of child
    fields per node type, so traversal matches source order.
3.  **Classification**: ``node_kind`` maps a node to the closed ``NodeKind`` set
    and ``detect_dialect`` decides which string node type the tree uses.
"""

import json
from typing import Any, Dict, Iterator, List, Optional

from tw_apply.enums import Dialect, NodeKind

Node = Dict[str, Any]

# Positional and bookkeeping fields that never hold traversable children.
METADATA_KEYS = frozenset(
  {
    "type",
    "loc",
    "start",
    "end",
    "range",
    "extra",
    "comments",
    "leadingComments",
    "trailingComments",
    "innerComments",
    "tokens",
  }
)

_FUNCTION_KEYS = ["id", "typeParameters", "params", "returnType", "body"]
_CLASS_KEYS = ["decorators", "id", "typeParameters", "superClass", "superTypeParameters", "implements", "body"]
_METHOD_KEYS = ["decorators", "key", "typeParameters", "params", "returnType", "body"]
_CALL_KEYS = ["callee", "typeArguments", "typeParameters", "arguments"]

# Document-order child fields. Fields missing from an entry are still walked,
# after the listed ones, in the order the node stores them.
VISITOR_KEYS: Dict[str, List[str]] = {
  "File": ["program"],
  "Program": ["directives", "body"],
  "BlockStatement": ["directives", "body"],
  "ExpressionStatement": ["expression"],
  "ReturnStatement": ["argument"],
  "ThrowStatement": ["argument"],
  "IfStatement": ["test", "consequent", "alternate"],
  "SwitchStatement": ["discriminant", "cases"],
  "SwitchCase": ["test", "consequent"],
  "ForStatement": ["init", "test", "update", "body"],
  "ForInStatement": ["left", "right", "body"],
  "ForOfStatement": ["left", "right", "body"],
  "WhileStatement": ["test", "body"],
  "DoWhileStatement": ["body", "test"],
  "TryStatement": ["block", "handler", "finalizer"],
  "CatchClause": ["param", "body"],
  "LabeledStatement": ["label", "body"],
  "VariableDeclaration": ["declarations"],
  "VariableDeclarator": ["id", "init"],
  "FunctionDeclaration": _FUNCTION_KEYS,
  "FunctionExpression": _FUNCTION_KEYS,
  "ArrowFunctionExpression": ["typeParameters", "params", "returnType", "body"],
  "ClassDeclaration": _CLASS_KEYS,
  "ClassExpression": _CLASS_KEYS,
  "ClassBody": ["body"],
  "ClassProperty": ["decorators", "key", "typeAnnotation", "value"],
  "PropertyDefinition": ["decorators", "key", "value"],
  "ClassMethod": _METHOD_KEYS,
  "ObjectMethod": _METHOD_KEYS,
  "MethodDefinition": ["decorators", "key", "value"],
  "ObjectExpression": ["properties"],
  "ObjectPattern": ["properties", "typeAnnotation"],
  "ObjectProperty": ["key", "value", "decorators"],
  "Property": ["key", "value"],
  "ArrayExpression": ["elements"],
  "ArrayPattern": ["elements", "typeAnnotation"],
  "AssignmentPattern": ["left", "right"],
  "RestElement": ["argument", "typeAnnotation"],
  "SpreadElement": ["argument"],
  "CallExpression": _CALL_KEYS,
  "OptionalCallExpression": _CALL_KEYS,
  "NewExpression": _CALL_KEYS,
  "MemberExpression": ["object", "property"],
  "OptionalMemberExpression": ["object", "property"],
  "ConditionalExpression": ["test", "consequent", "alternate"],
  "BinaryExpression": ["left", "right"],
  "LogicalExpression": ["left", "right"],
  "AssignmentExpression": ["left", "right"],
  "UnaryExpression": ["argument"],
  "UpdateExpression": ["argument"],
  "AwaitExpression": ["argument"],
  "YieldExpression": ["argument"],
  "SequenceExpression": ["expressions"],
  "TemplateLiteral": ["quasis", "expressions"],
  "TaggedTemplateExpression": ["tag", "typeParameters", "quasi"],
  "ImportDeclaration": ["specifiers", "source", "attributes"],
  "ExportNamedDeclaration": ["declaration", "specifiers", "source", "attributes"],
  "ExportDefaultDeclaration": ["declaration"],
  "ExportAllDeclaration": ["exported", "source", "attributes"],
  "JSXElement": ["openingElement", "children", "closingElement"],
  "JSXFragment": ["openingFragment", "children", "closingFragment"],
  "JSXOpeningElement": ["name", "typeArguments", "typeParameters", "attributes"],
  "JSXAttribute": ["name", "value"],
  "JSXSpreadAttribute": ["argument"],
  "JSXExpressionContainer": ["expression"],
  "TSAsExpression": ["expression", "typeAnnotation"],
  "TSSatisfiesExpression": ["expression", "typeAnnotation"],
  "TSNonNullExpression": ["expression"],
  "TSTypeAssertion": ["typeAnnotation", "expression"],
  "TSEnumDeclaration": ["id", "members"],
  "TSEnumMember": ["id", "initializer"],
}


def is_node(value: Any) -> bool:
  """
  Checks whether a value is a host AST node.

  Args:
      value (Any): Any JSON value found in the tree.

  Returns:
      bool: True if the value is a dict carrying a string ``type``.
  """
  return isinstance(value, dict) and isinstance(value.get("type"), str)


def _holds_nodes(value: Any) -> bool:
  if is_node(value):
    return True
  if isinstance(value, list):
    return any(is_node(item) for item in value)
  return False


def child_keys(node: Node) -> List[str]:
  """
  Returns the fields of ``node`` that hold child nodes, in document order.

  Args:
      node (Node): The parent node.

  Returns:
      List[str]: Field names whose values are nodes or lists of nodes.
  """
  ordered = [key for key in VISITOR_KEYS.get(node["type"], []) if _holds_nodes(node.get(key))]
  for key, value in node.items():
    if key in METADATA_KEYS or key in ordered:
      continue
    if _holds_nodes(value):
      ordered.append(key)
  return ordered


def iter_nodes(root: Node) -> Iterator[Node]:
  """
  Yields every node of the tree in pre-order, document order.

  Args:
      root (Node): Tree root.

  Yields:
      Node: Each node, parents before children.
  """
  stack: List[Node] = [root]
  while stack:
    node = stack.pop()
    yield node
    children: List[Node] = []
    for key in child_keys(node):
      value = node[key]
      if isinstance(value, list):
        children.extend(item for item in value if is_node(item))
      else:
        children.append(value)
    stack.extend(reversed(children))


def node_kind(node: Node) -> NodeKind:
  """
  Classifies a node into the closed set of kinds the rewriter dispatches on.

  Args:
      node (Node): Any host node.

  Returns:
      NodeKind: The kind tag.
  """
  node_type = node["type"]
  if node_type == "StringLiteral":
    return NodeKind.STRING_LITERAL
  if node_type == "Literal" and isinstance(node.get("value"), str) and "regex" not in node:
    return NodeKind.STRING_LITERAL
  if node_type == "TemplateLiteral":
    return NodeKind.TEMPLATE_LITERAL
  if node_type == "TemplateElement":
    return NodeKind.TEMPLATE_FRAGMENT
  return NodeKind.OTHER


def detect_dialect(root: Node) -> Dialect:
  """
  Decides whether the tree follows Babel or ESTree naming for strings.

  The first string node found decides, whatever the root type, since
  ``@babel/parser`` with its ``estree`` plugin wraps ESTree nodes in a ``File``.
  Trees without any string default to Babel.

  Args:
      root (Node): Tree root.

  Returns:
      Dialect: The detected dialect.
  """
  for node in iter_nodes(root):
    if node["type"] == "StringLiteral":
      return Dialect.BABEL
    if node["type"] == "Literal" and isinstance(node.get("value"), str):
      return Dialect.ESTREE
  return Dialect.BABEL


def get_program(root: Node) -> Node:
  """
  Resolves the ``Program`` node of a tree.

  Args:
      root (Node): A ``File`` or ``Program`` node.

  Returns:
      Node: The program node.

  Raises:
      ValueError: If the root is neither a ``File`` nor a ``Program``.
  """
  root_type = root.get("type") if isinstance(root, dict) else None
  if root_type == "File" and is_node(root.get("program")):
    return root["program"]
  if root_type == "Program":
    return root
  raise ValueError(f"Unsupported AST root type: '{root_type}'. Expected 'File' or 'Program'.")


# --- Builders ---


def identifier(name: str) -> Node:
  return {"type": "Identifier", "name": name}


def member_expression(obj: Node, prop: Node, computed: bool = False) -> Node:
  return {"type": "MemberExpression", "object": obj, "property": prop, "computed": computed}


def string_literal(value: str, dialect: Dialect = Dialect.BABEL) -> Node:
  """
  Builds a string node in the tree's dialect.

  Args:
      value (str): The string value.
      dialect (Dialect): Naming convention of the host tree.

  Returns:
      Node: ``StringLiteral`` (Babel) or ``Literal`` with a quoted ``raw`` (ESTree).
  """
  if dialect is Dialect.ESTREE:
    return {"type": "Literal", "value": value, "raw": json.dumps(value)}
  return {"type": "StringLiteral", "value": value}


def template_element(raw: str, tail: bool = False, cooked: Optional[str] = None) -> Node:
  return {
    "type": "TemplateElement",
    "value": {"raw": raw, "cooked": raw if cooked is None else cooked},
    "tail": tail,
  }


def import_default_specifier(local: Node) -> Node:
  return {"type": "ImportDefaultSpecifier", "local": local}


def import_declaration(specifiers: List[Node], source: Node) -> Node:
  return {"type": "ImportDeclaration", "specifiers": specifiers, "source": source}


def jsx_expression_container(expression: Node) -> Node:
  return {"type": "JSXExpressionContainer", "expression": expression}
