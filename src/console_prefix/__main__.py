"""
Entry point for module execution (``python -m console_prefix``).

This module delegates execution to the CLI handler in ``console_prefix.cli.__main__``.
"""

import sys
from console_prefix.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
