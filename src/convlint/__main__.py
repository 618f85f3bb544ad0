"""
Entry point for module execution (``python -m convlint``).

This module delegates execution to the CLI handler in ``convlint.cli.__main__``.
"""

import sys
from convlint.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
