"""
Extraction and rewrite engine for inline ``@apply`` directives.
"""

from tw_apply.core.allocator import SelectorAllocator, format_rule
from tw_apply.core.detector import DIRECTIVE_MARKER, detect_directive
from tw_apply.core.emitter import (
  inject_stylesheet_import,
  stylesheet_basename,
  stylesheet_path,
  write_stylesheet,
)
from tw_apply.core.engine import MacroEngine, MacroResult, apply_macro
from tw_apply.core.rewriter import DirectiveRewriter
from tw_apply.core.segmenter import REFERENCE_IDENTIFIER, segment_fragment

__all__ = [
  "DIRECTIVE_MARKER",
  "DirectiveRewriter",
  "MacroEngine",
  "MacroResult",
  "REFERENCE_IDENTIFIER",
  "SelectorAllocator",
  "apply_macro",
  "detect_directive",
  "format_rule",
  "inject_stylesheet_import",
  "segment_fragment",
  "stylesheet_basename",
  "stylesheet_path",
  "write_stylesheet",
]
