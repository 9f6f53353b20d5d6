"""
Template Fragment Segmentation.

When a static fragment of a template literal holds a directive, the fragment
is consumed entirely. It is replaced by an empty-or-space left fragment, an
interpolated reference to the generated selector, and an empty-or-space right
fragment. A single space is restored on either side when the original raw text
had one there, so neighbouring class names stay separated.
"""

from typing import NamedTuple

from tw_apply.core.nodes import Node, identifier, member_expression, template_element

REFERENCE_IDENTIFIER = "__twa__"


class Segments(NamedTuple):
  """The three pieces replacing one directive fragment."""

  left: Node
  reference: Node
  right: Node


def selector_reference(selector: str) -> Node:
  """
  Builds ``__twa__.<selector>``.

  Args:
      selector (str): Generated selector name.

  Returns:
      Node: A member expression node.
  """
  return member_expression(identifier(REFERENCE_IDENTIFIER), identifier(selector))


def segment_fragment(fragment: Node, selector: str) -> Segments:
  """
  Splits a directive-bearing template fragment.

  Args:
      fragment (Node): The original ``TemplateElement``.
      selector (str): Selector allocated for its directive.

  Returns:
      Segments: Left fragment, reference expression, right fragment. The right
      fragment inherits the original ``tail`` flag.
  """
  raw = fragment["value"]["raw"]
  left_text = " " if raw.startswith(" ") else ""
  right_text = " " if raw.endswith(" ") else ""

  return Segments(
    left=template_element(left_text, tail=False),
    reference=selector_reference(selector),
    right=template_element(right_text, tail=bool(fragment.get("tail", False))),
  )
