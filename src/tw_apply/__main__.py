"""
Entry point for module execution (``python -m tw_apply``).

This module delegates execution to the CLI handler in ``tw_apply.cli.__main__``.
"""

import sys
from tw_apply.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
