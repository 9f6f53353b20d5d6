"""
Directive Detection.

A literal carries an extractable directive when its text, stripped of
surrounding whitespace, starts with the ``@apply`` marker followed by a space.
The returned body keeps the marker; only the surrounding whitespace is removed.
"""

from typing import Optional

DIRECTIVE_MARKER = "@apply "

# ECMAScript WhiteSpace and LineTerminator code points, as removed by String.prototype.trim.
JS_WHITESPACE = (
  "\t\n\v\f\r \xa0\u1680"
  "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
  "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def detect_directive(text: str) -> Optional[str]:
  """
  Extracts the directive body from a literal's text.

  Args:
      text (str): Raw value of a string literal or of one template fragment.

  Returns:
      Optional[str]: The trimmed text (marker included) if it holds a directive,
      otherwise None.
  """
  body = text.strip(JS_WHITESPACE)
  if body.startswith(DIRECTIVE_MARKER):
    return body
  return None
