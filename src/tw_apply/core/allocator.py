"""
Selector Allocation.

Provides the ``SelectorAllocator``, the per-invocation traversal state that
hands out sequential selector names (``twa0``, ``twa1``, ...) and records one
generated rule per allocation. There is no interning by content: identical
directive bodies get distinct selectors and distinct rules.
"""

from typing import List

SELECTOR_PREFIX = "twa"


def format_rule(selector: str, body: str) -> str:
  """
  Renders a single stylesheet rule.

  The directive body is embedded verbatim and always followed by a ``;``,
  so a body already ending in ``;`` yields a doubled semicolon.

  Args:
      selector (str): Class name without the leading dot.
      body (str): Directive body, marker included.

  Returns:
      str: Rule text of the form ``.{selector}{{body};}``.
  """
  return f".{selector}{{{body};}}"


class SelectorAllocator:
  """
  Mutable counter and rule list owned by exactly one invocation.

  Attributes:
      counter (int): Number of selectors allocated so far.
      rules (List[str]): Generated rules in allocation order.
  """

  def __init__(self, prefix: str = SELECTOR_PREFIX) -> None:
    self.prefix = prefix
    self.counter = 0
    self.rules: List[str] = []

  def allocate(self, body: str) -> str:
    """
    Allocates the next selector for a directive occurrence.

    Args:
        body (str): Directive body returned by the detector.

    Returns:
        str: The fresh selector name.
    """
    selector = f"{self.prefix}{self.counter}"
    self.rules.append(format_rule(selector, body))
    self.counter += 1
    return selector

  def stylesheet(self) -> str:
    """Concatenates the rules, without separators."""
    return "".join(self.rules)
