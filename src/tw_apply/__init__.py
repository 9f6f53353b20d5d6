"""
tw-apply Package.

A build-time macro that extracts inline ``@apply`` directives from string and
template literals into a sibling CSS module, replacing each occurrence with a
reference to a generated, sequentially numbered selector.

Usage
-----

.. code-block:: python

    import tw_apply

    # `ast` is a Babel (or ESTree) JSON AST parsed from src/Button.tsx
    result = tw_apply.apply_macro(ast, "src/Button.tsx", {"fileSuffix": ".local"})
    print(result.stylesheet_path)
    # src/Button.local.module.css
"""

from tw_apply.config import MacroConfig
from tw_apply.core.engine import MacroEngine, MacroResult, apply_macro
from tw_apply.errors import ConfigurationError, MissingFilenameError, TwApplyError

__version__ = "0.1.0"

__all__ = [
  "ConfigurationError",
  "MacroConfig",
  "MacroEngine",
  "MacroResult",
  "MissingFilenameError",
  "TwApplyError",
  "__version__",
  "apply_macro",
]
