"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Builders for Babel/ESTree JSON AST fragments.
- Snapshot testing fixture for generated artifacts.
"""

import sys
import pytest
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

# Add src to path so we can import 'tw_apply' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

Node = Dict[str, Any]


class AstFactory:
  """
  Minimal builders producing the JSON shapes emitted by @babel/parser.
  """

  @staticmethod
  def string(value: str) -> Node:
    return {"type": "StringLiteral", "value": value, "extra": {"raw": f'"{value}"', "rawValue": value}}

  @staticmethod
  def literal(value: Any) -> Node:
    """ESTree string/number literal."""
    return {"type": "Literal", "value": value, "raw": repr(value)}

  @staticmethod
  def ident(name: str) -> Node:
    return {"type": "Identifier", "name": name}

  @staticmethod
  def template(raws: List[str], expressions: Optional[List[Node]] = None) -> Node:
    quasis = [
      {
        "type": "TemplateElement",
        "value": {"raw": raw, "cooked": raw},
        "tail": index == len(raws) - 1,
      }
      for index, raw in enumerate(raws)
    ]
    return {"type": "TemplateLiteral", "quasis": quasis, "expressions": list(expressions or [])}

  @staticmethod
  def stmt(expression: Node) -> Node:
    return {"type": "ExpressionStatement", "expression": expression}

  @staticmethod
  def const(name: str, init: Node) -> Node:
    return {
      "type": "VariableDeclaration",
      "kind": "const",
      "declarations": [{"type": "VariableDeclarator", "id": AstFactory.ident(name), "init": init}],
    }

  @staticmethod
  def program(*statements: Node) -> Node:
    return {"type": "Program", "sourceType": "module", "body": list(statements), "directives": []}

  @staticmethod
  def file(*statements: Node) -> Node:
    return {"type": "File", "program": AstFactory.program(*statements), "comments": []}

  @staticmethod
  def raws(template: Node) -> List[str]:
    return [q["value"]["raw"] for q in template["quasis"]]

  @staticmethod
  def is_reference(node: Node, selector: str) -> bool:
    return (
      node["type"] == "MemberExpression"
      and node["object"] == {"type": "Identifier", "name": "__twa__"}
      and node["property"] == {"type": "Identifier", "name": selector}
      and node["computed"] is False
    )


@pytest.fixture
def ast() -> AstFactory:
  """Fixture exposing the AST builders."""
  return AstFactory()


class SnapshotAssert:
  """
  Simple snapshot comparison logic to verify generated artifacts stay stable.
  """

  def __init__(self, request: pytest.FixtureRequest):
    self.request = request
    self.test_name = request.node.name
    self.snapshot_dir = Path(request.node.fspath).parent / "__snapshots__"
    self.update_mode = request.config.getoption("--update-snapshots", default=False)

  def assert_match(self, content: str, extension: str = "txt", normalizer: Optional[Callable[[str], str]] = None):
    """
    Compares content against stored file.

    Args:
        content: The actual output string.
        extension: File extension (default 'txt').
        normalizer: Optional function applied to both sides before comparison.
    """
    if not self.snapshot_dir.exists():
      self.snapshot_dir.mkdir(parents=True)

    snapshot_file = self.snapshot_dir / f"{self.test_name}.{extension}"
    content = content.replace("\r\n", "\n")

    if self.update_mode or not snapshot_file.exists():
      snapshot_file.write_text(normalizer(content) if normalizer else content, encoding="utf-8")
      if self.update_mode:
        return

    expected = snapshot_file.read_text(encoding="utf-8").replace("\r\n", "\n")

    lhs, rhs = content, expected
    if normalizer:
      lhs = normalizer(lhs)
      rhs = normalizer(rhs)

    assert lhs == rhs, f"Snapshot mismatch for {snapshot_file.name}. Run pytest with --update-snapshots to accept changes."


@pytest.fixture
def snapshot(request):
  """Fixture to assert text matches a stored snapshot."""
  return SnapshotAssert(request)


def pytest_addoption(parser):
  """Add CLI flag to update snapshots."""
  parser.addoption("--update-snapshots", action="store_true", default=False, help="Update stored snapshots")
