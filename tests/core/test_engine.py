"""
Tests for the macro engine pipeline.

Verifies:
1. End-to-end rewriting, stylesheet writing and import injection.
2. Zero-directive files still get an (empty) stylesheet and the import.
3. Validation failures abort before the AST or the file system is touched.
"""

import copy
import json
from pathlib import Path

import pytest

from tw_apply.config import MacroConfig
from tw_apply.core.engine import MacroEngine, MacroResult, apply_macro
from tw_apply.errors import ConfigurationError, MissingFilenameError


def _button_ast(ast):
  return ast.file(
    ast.const("base", ast.string("@apply px-4 py-2")),
    ast.const(
      "cls",
      ast.template(["px-2 ", " @apply rounded; ", ""], [ast.ident("size"), ast.ident("extra")]),
    ),
    ast.const("bold", ast.template(["@apply text-bold;"])),
    ast.const("again", ast.string("@apply text-bold;")),
  )


def test_end_to_end(tmp_path: Path, ast) -> None:
  tree = _button_ast(ast)
  source = tmp_path / "Button.tsx"

  result = apply_macro(tree, source)

  assert isinstance(result, MacroResult)
  assert result.stylesheet_path == str(tmp_path / "Button.module.css")
  assert result.stylesheet_basename == "Button.module.css"
  assert result.selector_count == 4
  expected = ".twa0{@apply px-4 py-2;}.twa1{@apply rounded;;}.twa2{@apply text-bold;;}.twa3{@apply text-bold;;}"
  assert result.stylesheet == expected
  assert (tmp_path / "Button.module.css").read_text(encoding="utf-8") == expected

  body = tree["program"]["body"]
  assert body[0]["type"] == "ImportDeclaration"
  assert body[0]["source"]["value"] == "./Button.module.css"
  assert ast.is_reference(body[1]["declarations"][0]["init"], "twa0")

  cls = body[2]["declarations"][0]["init"]
  assert ast.raws(cls) == ["px-2 ", " ", " ", ""]
  assert [e.get("name") for e in cls["expressions"]] == ["size", None, "extra"]
  assert ast.is_reference(cls["expressions"][1], "twa1")


def test_stylesheet_snapshot(tmp_path: Path, ast, snapshot) -> None:
  result = apply_macro(_button_ast(ast), tmp_path / "Button.tsx")

  snapshot.assert_match(Path(result.stylesheet_path).read_text(encoding="utf-8"), extension="css")


def test_zero_directives_still_emit(tmp_path: Path, ast) -> None:
  tree = ast.file(ast.const("a", ast.string("px-2")))

  result = apply_macro(tree, tmp_path / "Plain.jsx")

  stylesheet = tmp_path / "Plain.module.css"
  assert stylesheet.exists()
  assert stylesheet.read_text(encoding="utf-8") == ""
  assert result.rules == []
  body = tree["program"]["body"]
  assert len(body) == 2
  assert body[0]["source"]["value"] == "./Plain.module.css"


def test_import_injected_once(tmp_path: Path, ast) -> None:
  tree = ast.file(*[ast.const(f"c{i}", ast.string(f"@apply p-{i}")) for i in range(5)])

  apply_macro(tree, tmp_path / "Many.tsx")

  imports = [s for s in tree["program"]["body"] if s["type"] == "ImportDeclaration"]
  assert len(imports) == 1
  assert tree["program"]["body"][0] is imports[0]


def test_file_suffix(tmp_path: Path, ast) -> None:
  tree = ast.file(ast.const("a", ast.string("@apply m-1")))

  result = apply_macro(tree, tmp_path / "Button.tsx", {"fileSuffix": ".local"})

  assert result.stylesheet_basename == "Button.local.module.css"
  assert (tmp_path / "Button.local.module.css").read_text(encoding="utf-8") == ".twa0{@apply m-1;}"
  assert tree["program"]["body"][0]["source"]["value"] == "./Button.local.module.css"


def test_invalid_suffix_aborts_before_anything(tmp_path: Path, ast) -> None:
  """
  Verify a non-string fileSuffix fails before the AST or disk is touched.
  """
  tree = _button_ast(ast)
  before = copy.deepcopy(tree)

  with pytest.raises(ConfigurationError, match='Config fileSuffix "123" is not supported.'):
    apply_macro(tree, tmp_path / "Button.tsx", {"fileSuffix": 123})

  assert tree == before
  assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize("filename", [None, ""])
def test_missing_filename_aborts(tmp_path: Path, ast, filename) -> None:
  tree = _button_ast(ast)
  before = copy.deepcopy(tree)

  with pytest.raises(MissingFilenameError, match='The "filename" property was not found.'):
    MacroEngine().run(tree, filename)

  assert tree == before


def test_unsupported_root_aborts(tmp_path: Path, ast) -> None:
  with pytest.raises(ValueError, match="Unsupported AST root"):
    MacroEngine().run(ast.stmt(ast.string("@apply a")), tmp_path / "X.tsx")

  assert list(tmp_path.iterdir()) == []


def test_write_failure_propagates_after_rewrite(tmp_path: Path, ast) -> None:
  """
  Verify file system errors surface unchanged; the AST is already rewritten
  and no import has been injected.
  """
  tree = ast.file(ast.const("a", ast.string("@apply a")))

  with pytest.raises(FileNotFoundError):
    apply_macro(tree, tmp_path / "missing_dir" / "X.tsx")

  body = tree["program"]["body"]
  assert len(body) == 1
  assert ast.is_reference(body[0]["declarations"][0]["init"], "twa0")


def test_engine_state_is_per_run(tmp_path: Path, ast) -> None:
  """
  Verify numbering restarts for every file processed by the same engine.
  """
  engine = MacroEngine(MacroConfig(file_suffix=".gen"))

  first = engine.run(ast.file(ast.const("a", ast.string("@apply a"))), tmp_path / "A.tsx")
  second = engine.run(ast.file(ast.const("b", ast.string("@apply b"))), tmp_path / "B.tsx")

  assert first.rules == [".twa0{@apply a;}"]
  assert second.rules == [".twa0{@apply b;}"]
  assert (tmp_path / "B.gen.module.css").exists()


def test_estree_program_root(tmp_path: Path, ast) -> None:
  tree = ast.program(ast.const("a", ast.literal("@apply a")))

  apply_macro(tree, str(tmp_path / "legacy.js"))

  assert tree["body"][0]["source"] == {"type": "Literal", "value": "./legacy.module.css", "raw": '"./legacy.module.css"'}
  assert ast.is_reference(tree["body"][1]["declarations"][0]["init"], "twa0")


def test_estree_file_root(tmp_path: Path, ast) -> None:
  """
  Verify a File root wrapping ESTree nodes (babel's estree plugin) keeps Literal strings.
  """
  side_effect_import = {"type": "ImportDeclaration", "specifiers": [], "source": ast.literal("@apply a")}
  tree = ast.file(side_effect_import, ast.const("b", ast.literal("@apply b")))

  apply_macro(tree, str(tmp_path / "Card.jsx"))

  body = tree["program"]["body"]
  assert body[0]["source"] == {"type": "Literal", "value": "./Card.module.css", "raw": '"./Card.module.css"'}
  assert body[1]["source"] == {"type": "Literal", "value": "__twa__.twa0", "raw": '"__twa__.twa0"'}
  assert ast.is_reference(body[2]["declarations"][0]["init"], "twa1")


def test_rewritten_tree_is_json_serializable(tmp_path: Path, ast) -> None:
  tree = _button_ast(ast)

  apply_macro(tree, tmp_path / "Button.tsx")

  assert json.loads(json.dumps(tree)) == tree
